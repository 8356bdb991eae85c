from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from promptsmith.schemas.analysis import QualityAnalysis


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EvaluateRequest(_CamelModel):
    # Optional at the schema level so a missing field is a 400, not a 422
    prompt: str | None = None
    goal: str | None = None
    skip_analysis: bool = False


class EvaluateResponse(_CamelModel):
    ai_response: str
    match_percentage: int | None = None
    quality_analysis: QualityAnalysis | None = None
    analysis: QualityAnalysis | None = None
    improved_prompt: str | None = None


class GenerateRequest(_CamelModel):
    prompt: str | None = None
    goal: str | None = None


class GenerateResponse(_CamelModel):
    response: str


class HealthResponse(BaseModel):
    status: str = "ok"
    ollama: str
    environment: str | None = None
    api_url: str | None = None
    reason: str | None = None
    statusCode: int | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    message: str | None = None
