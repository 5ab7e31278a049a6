"""FastAPI server exposing the reconstruction pipeline over HTTP."""

import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from glyphmesh import __version__
from glyphmesh.api.models import ErrorResponse, GenerateRequest, HealthResponse
from glyphmesh.config import GlyphMeshSettings, get_default_settings
from glyphmesh.core import GlyphPipeline
from glyphmesh.exceptions import UnknownStrategyError
from glyphmesh.io import GlyphRasterizer
from glyphmesh.utils import RequestLogger, configure_logging

logger = structlog.get_logger("glyphmesh.api")


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def create_app(
    settings: GlyphMeshSettings | None = None,
    pipeline: GlyphPipeline | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Logging is configured here so that apps built by uvicorn reload or
    worker processes log the same way as the parent.

    Args:
        settings: Application settings (environment defaults if None)
        pipeline: Pre-built pipeline, mainly for tests (built from settings if None)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_default_settings()
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        json_output=settings.logging.json_output,
    )
    if pipeline is None:
        pipeline = GlyphPipeline(settings.reconstruction, GlyphRasterizer(settings.raster))

    request_logger = RequestLogger(logger, history=settings.server.stats_history)

    app = FastAPI(
        title="Glyphmesh API",
        description="Turn a rendered character into 3D-buildable geometry",
        version=__version__,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.request_logger = request_logger

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.warning("Invalid request", error=message)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=f"Invalid request: {message}").to_content(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error", error=str(exc), error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).to_content())

    @app.get("/health", response_model=HealthResponse)
    def health_check() -> HealthResponse:
        """Health check endpoint"""
        return HealthResponse(status="healthy", version=__version__)

    @app.post("/generate")
    def generate(body: GenerateRequest) -> JSONResponse:
        """
        Reconstruct one character.

        - **char**: character to render; only the first is used
        - **resolution**: canvas size, clamped to the configured range
        - **threshold**: luminance threshold, clamped to 0-255
        - **strategy**: contour (meshes + outlines), runs or greedy (rectangles)
        """
        text = (body.char or settings.raster.default_character)[:1]
        strategy = body.strategy or settings.reconstruction.default_strategy.value
        size = settings.reconstruction.clamp_resolution(body.resolution)
        request_logger.log_request_start(text, size, strategy)

        try:
            result = pipeline.reconstruct(text, size, body.threshold, strategy)
        except UnknownStrategyError as e:
            request_logger.log_request_error(text, e)
            return JSONResponse(status_code=400, content=ErrorResponse(error=str(e)).to_content())
        except Exception as e:
            request_logger.log_request_error(text, e, traceback=traceback.format_exc())
            return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).to_content())

        request_logger.log_request_complete(
            character=text,
            strategy=result.strategy,
            meshes=len(result.meshes),
            runs=len(result.runs),
            duration_ms=result.stats.duration_ms,
        )
        if result.strategy == "contour":
            request_logger.log_ring_analysis(
                text, result.stats.raw_rings, result.stats.islands, result.stats.holes
            )

        return JSONResponse(content={"success": True, **result.to_dict()})

    return app
