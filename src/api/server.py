"""
FastAPI server – the container App Runner runs.

Usage:
    uvicorn src.api.server:app --host 0.0.0.0 --port 8080 --reload

Endpoints:
    GET /         → greeting + the commit SHA the image was deployed with
    GET /health   → "OK" (App Runner health check, see AppRunnerStack)
"""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from opentelemetry import trace

from src.config import config
from src.observability import setup_logging, setup_observability

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    config.validate()
    setup_logging()
    setup_observability()
    logger.info(f"Starting server on port {config.PORT} (Commit: {config.COMMIT_SHA})")
    yield


app = FastAPI(title="App Runner Demo", version="0.1.0", lifespan=lifespan)


# ── Endpoints ──────────────────────────────────────────────────────────────────

@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    with tracer.start_as_current_span("root") as span:
        span.set_attribute("commit.sha", config.COMMIT_SHA)
        return f"Hello from AWS App Runner!\nCommit SHA: {config.COMMIT_SHA}\n"


@app.get("/health", response_class=PlainTextResponse)
def health() -> str:
    return "OK"
