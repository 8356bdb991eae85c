from fastapi import Request

from promptsmith.services.evaluator import EvaluatorService
from promptsmith.services.llm import UpstreamClient


def get_evaluator(request: Request) -> EvaluatorService:
    """Retrieve the EvaluatorService singleton from app state."""
    return request.app.state.evaluator


def get_upstream_client(request: Request) -> UpstreamClient:
    """Retrieve the shared UpstreamClient from app state."""
    return request.app.state.upstream_client
