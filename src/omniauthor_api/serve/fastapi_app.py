"""FastAPI gateway for Gemini on Vertex AI.

Endpoints:
- GET /health
- GET /
- POST /api/generate  { "prompt": "..." }
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from omniauthor_api import __version__
from omniauthor_api.common.config import Settings, load_settings
from omniauthor_api.common.errors import GatewayError, GenerationError, ValidationError
from omniauthor_api.common.logging_setup import setup_logging
from omniauthor_api.common.schema import ErrorOut, GenerateIn, GenerateOut, HealthOut, ServiceInfo
from omniauthor_api.serve.model_client import ModelClient, VertexGeminiClient

LOGGER = logging.getLogger("omniauthor.app")

SERVICE_NAME = "omniauthor-api"
SERVICE_INFO = ServiceInfo(
    name="OmniAuthor API",
    version=__version__,
    description="AI-powered novel writing platform using Vertex AI Gemini",
    endpoints={
        "health": "/health",
        "generate": "/api/generate",
    },
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _format_validation_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError("Invalid request body", _format_validation_errors(exc))
    return JSONResponse(status_code=err.status_code, content=err.payload())


def get_model_client(request: Request) -> ModelClient:
    client = request.app.state.model_client
    if client is None:
        raise GenerationError("Model client is not initialised")
    return client


def create_app(settings: Settings | None = None, model_client: ModelClient | None = None) -> FastAPI:
    """
    Build the gateway app.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        model_client: Injected model client. When omitted, a VertexGeminiClient
            is created on startup and shared by every request.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.model_client is None:
            if not settings.project:
                LOGGER.warning(
                    "GOOGLE_CLOUD_PROJECT is not set; relying on application default credentials"
                )
            app.state.model_client = VertexGeminiClient(settings)
        LOGGER.info(
            "Model %s | project=%s location=%s",
            settings.model_id,
            settings.project,
            settings.location,
        )
        yield

    app = FastAPI(title=SERVICE_INFO.name, version=SERVICE_INFO.version, lifespan=lifespan)
    app.state.settings = settings
    app.state.model_client = model_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(status="ok", service=SERVICE_NAME, timestamp=utc_now_iso())

    @app.get("/", response_model=ServiceInfo)
    def info() -> ServiceInfo:
        return SERVICE_INFO

    @app.post(
        "/api/generate",
        response_model=GenerateOut,
        responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    )
    async def generate(request: Request, body: GenerateIn | None = None) -> GenerateOut:
        if body is None or not body.prompt:
            raise ValidationError("Prompt is required")

        client = get_model_client(request)
        try:
            text = await client.generate_content(body.prompt)
        except Exception as e:
            LOGGER.error("Error generating content: %s", e)
            raise GenerationError(str(e)) from e
        return GenerateOut(success=True, response=text)

    return app


_settings = load_settings()
setup_logging(_settings.log_level)
app = create_app(_settings)
