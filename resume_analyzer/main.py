import json
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk

from resume_analyzer.ai.factory import build_ai_client
from resume_analyzer.api.analysis import router as analysis_router
from resume_analyzer.api.health import router as health_router
from resume_analyzer.core.config import Settings, load_settings
from resume_analyzer.core.cors import cors_allowed_origins
from resume_analyzer.core.errors import AnalyzerError, ValidationError

logger = logging.getLogger(__name__)


async def _analyzer_error_handler(request: Request, exc: AnalyzerError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        logger.info(json.dumps({"event": "request_rejected", "path": request.url.path, "error": str(exc)}))
    else:
        logger.error(
            json.dumps(
                {
                    "event": "request_failed",
                    "path": request.url.path,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                }
            )
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        json.dumps({"event": "request_invalid", "path": request.url.path, "errors": len(exc.errors())})
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(json.dumps({"event": "request_crashed", "path": request.url.path}))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)

    app = FastAPI(title="AI Resume Analyzer API", version="1.0.0")
    app.state.settings = settings
    app.state.ai_client = build_ai_client(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(settings),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AnalyzerError, _analyzer_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(analysis_router, tags=["Analysis"])
    return app


app = create_app()
