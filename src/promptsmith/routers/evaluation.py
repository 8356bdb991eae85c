from fastapi import APIRouter, Depends

from promptsmith.dependencies import get_evaluator
from promptsmith.exceptions import InvalidRequestError
from promptsmith.schemas.evaluation import (
    EvaluateRequest,
    EvaluateResponse,
    GenerateRequest,
    GenerateResponse,
)
from promptsmith.services.evaluator import EvaluatorService

router = APIRouter(prefix="/api", tags=["evaluation"])


@router.post("/evaluate", response_model=EvaluateResponse, response_model_exclude_none=True)
async def evaluate(
    body: EvaluateRequest | None = None,
    evaluator: EvaluatorService = Depends(get_evaluator),
) -> EvaluateResponse:
    """Run the prompt upstream, then score it against the goal."""
    # A bodiless POST is a missing-field error like any other
    body = body or EvaluateRequest()
    if not (body.prompt and body.prompt.strip()) or not (body.goal and body.goal.strip()):
        raise InvalidRequestError("Prompt and goal are required")

    result = await evaluator.evaluate(body.prompt, body.goal, skip_analysis=body.skip_analysis)

    if result.analysis is None:
        return EvaluateResponse(ai_response=result.ai_response)

    return EvaluateResponse(
        ai_response=result.ai_response,
        match_percentage=result.match_percentage,
        quality_analysis=result.analysis,
        analysis=result.analysis,
        improved_prompt=result.analysis.improved_prompt,
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    body: GenerateRequest | None = None,
    evaluator: EvaluatorService = Depends(get_evaluator),
) -> GenerateResponse:
    """Run a prompt upstream and return the model's text."""
    body = body or GenerateRequest()
    if not (body.prompt and body.prompt.strip()):
        raise InvalidRequestError(
            "Prompt is required", error="Prompt is required", message="Please provide a prompt."
        )

    return GenerateResponse(response=await evaluator.generate(body.prompt))
