"""Promptsmith schemas."""

from promptsmith.schemas.analysis import CategoryScore, QualityAnalysis
from promptsmith.schemas.evaluation import (
    ErrorResponse,
    EvaluateRequest,
    EvaluateResponse,
    GenerateRequest,
    GenerateResponse,
    HealthResponse,
)

__all__ = [
    "CategoryScore",
    "ErrorResponse",
    "EvaluateRequest",
    "EvaluateResponse",
    "GenerateRequest",
    "GenerateResponse",
    "HealthResponse",
    "QualityAnalysis",
]
