"""
FitQuest - Main Application
Quest generation API + demo data + health check.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitquest import __version__
from fitquest.api import quests
from fitquest.config import settings
from fitquest.errors import ProviderUnavailableError, QuestGenerationError
from fitquest.logging_config import setup_logging
from fitquest.schemas.quest import issues_from_error, to_iso_utc
from fitquest.schemas.response import ErrorResponse, HealthResponse
from fitquest.services.openai_client import build_generator, build_openai_client

logger = logging.getLogger("fitquest")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the provider client once and keep it for the process lifetime."""
    setup_logging(settings.log_level)
    logger.info("fitquest_starting", extra={"host": settings.host, "port": settings.port})

    client = build_openai_client(settings)
    app.state.openai_client = client
    app.state.generator = build_generator(settings, client)

    yield

    if client is not None:
        await client.close()
    logger.info("fitquest_stopped")


app = FastAPI(
    title="FitQuest",
    description="AI-generated fitness quests with validated structured output.",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    details = issues_from_error(exc, skip_prefix=("body",))
    return _error(400, ErrorResponse(error="Invalid request body", details=details))


@app.exception_handler(ProviderUnavailableError)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError):
    logger.error("provider_unavailable", extra={"error": exc.message})
    return _error(503, ErrorResponse(error=exc.message))


@app.exception_handler(QuestGenerationError)
async def generation_error_handler(request: Request, exc: QuestGenerationError):
    logger.error("quest_generation_failed", extra={"error": exc.message})
    return _error(500, ErrorResponse(error=exc.message))


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="ok",
        timestamp=to_iso_utc(datetime.now(timezone.utc)),
        service=settings.service_name,
    )


app.include_router(quests.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fitquest.main:app", host=settings.host, port=settings.port)
