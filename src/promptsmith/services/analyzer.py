"""Model-backed prompt analysis with heuristic fallback.

The upstream model is asked to grade the prompt and suggest a better one as
JSON. Its answers are loose: JSON wrapped in prose or markdown fences, scores
as strings, missing fields. Anything that does not validate is discarded in
favour of the heuristic scorer, so callers always get a ``QualityAnalysis``.
"""

import logging
import random

from pydantic import BaseModel, Field, ValidationError, field_validator

from promptsmith.config import Settings
from promptsmith.exceptions import PromptsmithError
from promptsmith.schemas.analysis import CategoryScore, QualityAnalysis
from promptsmith.services.llm import UpstreamClient
from promptsmith.services.normalizer import ExtractionFailure, normalize
from promptsmith.services.scorer import analyze_prompt
from promptsmith.utils.llm_parse import extract_json_object

logger = logging.getLogger(__name__)

_ANALYSIS_PROMPT = """\
You are an AI prompt analysis expert. Analyze the following prompt based on how well it would work for a general AI assistant.

User's goal: "{goal}"
User's prompt: "{prompt}"

Analyze the prompt for:
1. Clarity (0-100): How clear and specific is the prompt? Does it specify tone, style, format, audience, or purpose?
2. Detail (0-100): How detailed and informative is the prompt?
3. Relevance (0-100): How relevant is the prompt to the user's stated goal?

For each category, provide a score and brief feedback.
Also suggest an improved version of the prompt.

Format your response as a JSON object with this structure:
{{
  "clarity": {{"score": number, "feedback": "string"}},
  "detail": {{"score": number, "feedback": "string"}},
  "relevance": {{"score": number, "feedback": "string"}},
  "improvedPrompt": "string"
}}"""


class _ModelCategory(BaseModel):
    score: float = Field(..., allow_inf_nan=False)
    feedback: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _numeric_score(cls, value):
        # bool is an int subclass but never a real score
        if isinstance(value, bool):
            raise ValueError("score must be numeric")
        return value

    def to_category(self) -> CategoryScore:
        return CategoryScore(score=max(0, min(100, int(self.score))), feedback=self.feedback)


class _ModelAnalysis(BaseModel):
    clarity: _ModelCategory
    detail: _ModelCategory
    relevance: _ModelCategory
    improvedPrompt: str = Field(..., min_length=1)


def parse_model_analysis(text: str) -> QualityAnalysis | None:
    """Turn a model answer into a ``QualityAnalysis``, or None if it does not fit."""
    data = extract_json_object(text)
    if data is None:
        return None
    return analysis_from_dict(data)


def analysis_from_dict(data: dict) -> QualityAnalysis | None:
    try:
        parsed = _ModelAnalysis.model_validate(data)
    except ValidationError as e:
        logger.info("Model analysis failed validation: %s", e.error_count())
        return None

    improved = parsed.improvedPrompt.strip()
    if not improved:
        return None
    if not improved.endswith((".", "!", "?")):
        improved += "."

    return QualityAnalysis(
        clarity=parsed.clarity.to_category(),
        detail=parsed.detail.to_category(),
        relevance=parsed.relevance.to_category(),
        improved_prompt=improved,
    )


class PromptAnalyzer:
    def __init__(
        self,
        client: UpstreamClient,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._enabled = settings.ai_analysis_enabled
        self._timeout = settings.resolve_analysis_timeout()
        self._rng = rng

    async def analyze(self, prompt: str, goal: str) -> QualityAnalysis:
        if self._enabled:
            analysis = await self._analyze_with_model(prompt, goal)
            if analysis is not None:
                logger.info("Using AI-generated analysis")
                return analysis
            logger.info("Falling back to rule-based analysis")
        return analyze_prompt(prompt, goal, rng=self._rng)

    async def _analyze_with_model(self, prompt: str, goal: str) -> QualityAnalysis | None:
        try:
            payload = await self._client.chat(
                _ANALYSIS_PROMPT.format(goal=goal, prompt=prompt),
                timeout=self._timeout,
            )
        except PromptsmithError as e:
            logger.warning("AI analysis request failed: %s", e)
            return None

        # Some upstream revisions hand back the JSON object itself as content
        content = payload.get("content") if isinstance(payload, dict) else None
        if isinstance(content, dict) and "clarity" in content:
            return analysis_from_dict(content)

        answer = normalize(payload)
        if isinstance(answer, ExtractionFailure):
            logger.warning("AI analysis response unusable: %s", answer.reason)
            return None

        analysis = parse_model_analysis(answer)
        if analysis is None:
            logger.warning("Could not extract valid analysis from response: %s", answer[:150])
        return analysis
