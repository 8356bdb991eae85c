import logging
from dataclasses import dataclass

from promptsmith.config import Settings
from promptsmith.exceptions import ExtractionError
from promptsmith.schemas.analysis import QualityAnalysis
from promptsmith.services.analyzer import PromptAnalyzer
from promptsmith.services.llm import UpstreamClient
from promptsmith.services.normalizer import ExtractionFailure, normalize
from promptsmith.utils.text import match_percentage

logger = logging.getLogger(__name__)

_ASSISTANT_PREAMBLE = "You are a helpful AI assistant. Please respond to the following prompt: "

# Error labels distinguish "the upstream answered, but with nothing usable"
# from "the upstream did not answer"
_EXTRACTION_LABELS = {
    "no meaningful text": "Content extraction error",
    "no content in email_template": "Content error",
}


@dataclass
class EvaluationResult:
    ai_response: str
    match_percentage: int | None = None
    analysis: QualityAnalysis | None = None


def _require_text(payload: object) -> str:
    answer = normalize(payload)
    if isinstance(answer, ExtractionFailure):
        logger.warning("Unusable upstream response (%s): %s", answer.shape.value, answer.reason)
        raise ExtractionError(
            answer.reason, error=_EXTRACTION_LABELS.get(answer.reason, "Format error")
        )
    return answer


class EvaluatorService:
    """Runs a user's prompt upstream and grades it against their goal."""

    def __init__(self, client: UpstreamClient, analyzer: PromptAnalyzer, settings: Settings) -> None:
        self._client = client
        self._analyzer = analyzer
        self._timeout = settings.resolve_generation_timeout()
        self._generate_timeout = settings.resolve_generate_timeout()

    async def evaluate(self, prompt: str, goal: str, *, skip_analysis: bool = False) -> EvaluationResult:
        logger.info("Evaluating prompt (%d chars) against goal (%d chars)", len(prompt), len(goal))
        payload = await self._client.chat(_ASSISTANT_PREAMBLE + prompt, timeout=self._timeout)
        ai_response = _require_text(payload)
        logger.info("Final AI response: %s...", ai_response[:100])

        if skip_analysis:
            return EvaluationResult(ai_response=ai_response)

        analysis = await self._analyzer.analyze(prompt, goal)
        return EvaluationResult(
            ai_response=ai_response,
            match_percentage=match_percentage(ai_response, goal),
            analysis=analysis,
        )

    async def generate(self, prompt: str) -> str:
        payload = await self._client.chat(prompt, timeout=self._generate_timeout)
        return _require_text(payload)
