from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CategoryScore(BaseModel):
    score: int = Field(..., ge=0, le=100)
    feedback: str = ""


class QualityAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    clarity: CategoryScore
    detail: CategoryScore
    relevance: CategoryScore
    improved_prompt: str = Field(..., min_length=1)
