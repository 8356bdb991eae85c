import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from promptsmith.config import Settings
from promptsmith.exceptions import ExtractionError, UpstreamError
from promptsmith.services.evaluator import EvaluatorService
from promptsmith.services.scorer import analyze_prompt

PROMPT = "write a story"
GOAL = "write a funny pirate story"


@pytest.fixture
def mock_settings() -> Settings:
    return Settings(ollama_api_url="http://upstream.test", upstream_model="test-model")


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mock_analyzer() -> MagicMock:
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(return_value=analyze_prompt(PROMPT, GOAL, rng=random.Random(0)))
    return analyzer


@pytest.fixture
def evaluator(mock_client: MagicMock, mock_analyzer: MagicMock, mock_settings: Settings) -> EvaluatorService:
    return EvaluatorService(mock_client, mock_analyzer, mock_settings)


class TestEvaluate:
    @pytest.mark.asyncio
    async def test_returns_answer_match_and_analysis(
        self, evaluator: EvaluatorService, mock_client: MagicMock, mock_analyzer: MagicMock
    ):
        mock_client.chat = AsyncMock(
            return_value={"type": "text", "content": "A funny pirate story about a parrot."}
        )

        result = await evaluator.evaluate(PROMPT, GOAL)

        assert result.ai_response == "A funny pirate story about a parrot."
        assert 50 < result.match_percentage <= 100
        assert result.analysis.relevance.score == 50
        mock_analyzer.analyze.assert_awaited_once_with(PROMPT, GOAL)

    @pytest.mark.asyncio
    async def test_wraps_prompt_for_general_assistant(self, evaluator: EvaluatorService, mock_client: MagicMock):
        mock_client.chat = AsyncMock(return_value={"response": "ok"})

        await evaluator.evaluate(PROMPT, GOAL)

        sent = mock_client.chat.call_args[0][0]
        assert sent.startswith("You are a helpful AI assistant.")
        assert sent.endswith(PROMPT)
        assert mock_client.chat.call_args[1]["timeout"] == 30.0

    @pytest.mark.asyncio
    async def test_skip_analysis(
        self, evaluator: EvaluatorService, mock_client: MagicMock, mock_analyzer: MagicMock
    ):
        mock_client.chat = AsyncMock(return_value={"response": "ok"})

        result = await evaluator.evaluate(PROMPT, GOAL, skip_analysis=True)

        assert result.ai_response == "ok"
        assert result.analysis is None
        assert result.match_percentage is None
        mock_analyzer.analyze.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload,label",
        [
            ({"type": "email_template", "content": {}}, "Content error"),
            ({"type": "email_template", "content": {"html": "<p></p>"}}, "Content extraction error"),
            ({"status": "done"}, "Format error"),
        ],
    )
    async def test_unusable_payload(
        self, evaluator: EvaluatorService, mock_client: MagicMock, mock_analyzer: MagicMock, payload, label
    ):
        mock_client.chat = AsyncMock(return_value=payload)

        with pytest.raises(ExtractionError) as exc_info:
            await evaluator.evaluate(PROMPT, GOAL)

        assert exc_info.value.error == label
        mock_analyzer.analyze.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, evaluator: EvaluatorService, mock_client: MagicMock):
        mock_client.chat = AsyncMock(side_effect=UpstreamError("API responded with status: 502", status=502))

        with pytest.raises(UpstreamError):
            await evaluator.evaluate(PROMPT, GOAL)


class TestGenerate:
    @pytest.mark.asyncio
    async def test_sends_raw_prompt(self, evaluator: EvaluatorService, mock_client: MagicMock):
        mock_client.chat = AsyncMock(
            return_value={"type": "email_template", "content": {"html": "<p>Hi</p><p>Bye</p>"}}
        )

        result = await evaluator.generate("Say hi")

        assert result == "Hi\nBye"
        assert mock_client.chat.call_args[0][0] == "Say hi"

    @pytest.mark.asyncio
    async def test_uses_short_timeout_when_serverless(self, mock_client: MagicMock, mock_analyzer: MagicMock):
        settings = Settings(ollama_api_url="http://upstream.test", vercel="1")
        evaluator = EvaluatorService(mock_client, mock_analyzer, settings)
        mock_client.chat = AsyncMock(return_value={"response": "Hi"})

        await evaluator.generate("Say hi")

        assert mock_client.chat.call_args[1]["timeout"] == 10.0
