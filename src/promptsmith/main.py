import logging
from contextlib import asynccontextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from promptsmith.config import settings
from promptsmith.exceptions import PromptsmithError
from promptsmith.routers import evaluation, frontend, health
from promptsmith.schemas.evaluation import ErrorResponse
from promptsmith.services.analyzer import PromptAnalyzer
from promptsmith.services.evaluator import EvaluatorService
from promptsmith.services.llm import UpstreamClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the upstream client on startup, close it on shutdown."""
    logger.info(
        "Environment: port=%s upstream=%s serverless=%s",
        settings.port,
        settings.ollama_api_url,
        settings.is_serverless,
    )
    logger.info("Worst-case /api/evaluate time: %.0fs", settings.evaluate_budget())

    client = UpstreamClient(settings)
    try:
        app.state.upstream_client = client
        app.state.evaluator = EvaluatorService(client, PromptAnalyzer(client, settings), settings)
        logger.info("Promptsmith service ready.")
        yield
    finally:
        logger.info("Shutting down Promptsmith service ...")
        await client.close()


app = FastAPI(
    title="Promptsmith",
    description="Prompt engineering trainer: run a prompt, score it, suggest a better one",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(evaluation.router)
app.include_router(health.router)
app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
# Catch-all, must come last
app.include_router(frontend.router)


@app.exception_handler(PromptsmithError)
async def promptsmith_error_handler(request: Request, exc: PromptsmithError):
    logger.info("%s %s failed: %s (%s)", request.method, request.url.path, exc.error, exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.error, details=exc.details, message=exc.message
        ).model_dump(),
    )
