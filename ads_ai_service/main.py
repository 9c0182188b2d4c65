import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .contracts_models import ErrorResponse, FillRequest, HealthResponse, VariantRequest
from .services.errors import AiServiceError
from .services.jobs import run_fill, run_variant
from .services.pipeline.llm_client import ChatCompletionsClient

logger = logging.getLogger("ads-ai")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def create_app(
    settings: Settings,
    client: Optional[ChatCompletionsClient] = None,
) -> FastAPI:
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    client = client or ChatCompletionsClient(settings)
    if not settings.upstream_configured:
        logger.warning("OPENAI_API_KEY is not set. Configure it in .env or the host environment.")

    app = FastAPI(title="Ad Assets AI Service", version="1.0.0")
    app.state.settings = settings
    app.state.client = client

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.CORS_ORIGINS),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.exception_handler(AiServiceError)
    async def ai_service_error_handler(request: Request, exc: AiServiceError):
        logger.warning("AI service error at %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "code": "INVALID_INPUT",
                "message": "Request body is invalid.",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception at %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "code": "INTERNAL_ERROR",
                "message": "Unexpected server error.",
                "details": {"path": request.url.path},
            },
        )

    @app.get("/health", response_model=HealthResponse)
    def health_get():
        return HealthResponse(
            upstream_configured=settings.upstream_configured,
            model_json=settings.OPENAI_MODEL_JSON,
            model_text=settings.OPENAI_MODEL_TEXT,
            cors_enabled=settings.cors_enabled,
        )

    @app.head("/health", status_code=200)
    def health_head():
        return Response(status_code=200)

    # Sync handlers: the provider call blocks, FastAPI runs these in its threadpool.
    # Responses are text/plain so intermediaries leave the JSON body untouched.
    @app.post("/api/ai-fill", response_class=PlainTextResponse, responses=_ERROR_RESPONSES)
    def ai_fill(payload: FillRequest):
        try:
            assets = run_fill(payload, client)
        except AiServiceError as exc:
            logger.warning("AI_FILL_FAIL: code=%s message=%s", exc.code, exc.message)
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        return PlainTextResponse(assets.model_dump_json())

    @app.post("/api/ai-variant", response_class=PlainTextResponse, responses=_ERROR_RESPONSES)
    def ai_variant(payload: VariantRequest):
        try:
            text = run_variant(payload, client)
        except AiServiceError as exc:
            logger.warning("AI_VARIANT_FAIL: code=%s message=%s", exc.code, exc.message)
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        return PlainTextResponse(text)

    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app(get_settings())
