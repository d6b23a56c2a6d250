"""FastAPI application for Polly text-to-speech stored on S3"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import synthesize
from .services.polly_service import PollySynthesizer
from .services.storage_service import S3AudioStore
from .services.synthesis_service import SynthesisPipeline
from .shared.config import Settings, get_settings
from .shared.errors import InvalidInput, UnexpectedError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send package logs to stderr whether started by run.py or by uvicorn directly"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("aac_tts").setLevel(level.upper())


def create_app(settings: Settings | None = None, synthesizer=None, store=None) -> FastAPI:
    """Build the application.

    Polly and S3 clients are created from ``settings`` unless test doubles
    are passed in.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    synthesizer = synthesizer or PollySynthesizer.from_settings(settings)
    store = store or S3AudioStore.from_settings(settings)

    app = FastAPI(
        title="AAC TTS Service",
        description="Synthesizes speech with Amazon Polly and stores it on S3",
        version="1.0.0"
    )
    app.state.settings = settings
    app.state.pipeline = SynthesisPipeline(synthesizer, store, settings.temp_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        logger.info("Incoming request: %s %s from %s", request.method, request.url.path, client)
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid request body for %s: %s", request.url.path, exc.errors())
        err = InvalidInput()
        return JSONResponse(status_code=err.status_code, content=err.to_response())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        err = UnexpectedError(str(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_response())

    app.include_router(
        synthesize.router,
        prefix="/api",
        tags=["tts"]
    )

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
