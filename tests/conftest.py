from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from promptsmith.exceptions import PromptsmithError
from promptsmith.services.evaluator import EvaluatorService
from promptsmith.services.llm import UpstreamClient, UpstreamHealth


@pytest.fixture
def mock_evaluator() -> MagicMock:
    """Create a mocked EvaluatorService for router tests."""
    return MagicMock(spec=EvaluatorService)


@pytest.fixture
def mock_upstream() -> MagicMock:
    """Create a mocked UpstreamClient that reports a healthy upstream."""
    client = MagicMock(spec=UpstreamClient)
    client.base_url = "http://upstream.test"
    client.check_health = AsyncMock(return_value=UpstreamHealth(connected=True))
    return client


@pytest.fixture
def test_app(mock_evaluator: MagicMock, mock_upstream: MagicMock) -> FastAPI:
    """Create a test FastAPI app with mocked dependencies."""
    from promptsmith.main import promptsmith_error_handler
    from promptsmith.routers.evaluation import router as evaluation_router
    from promptsmith.routers.frontend import router as frontend_router
    from promptsmith.routers.health import router as health_router

    app = FastAPI()
    app.state.evaluator = mock_evaluator
    app.state.upstream_client = mock_upstream
    app.include_router(evaluation_router)
    app.include_router(health_router)
    app.include_router(frontend_router)
    app.add_exception_handler(PromptsmithError, promptsmith_error_handler)
    return app


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app)
