"""FastAPI application factory and server entrypoint. No business logic; only wiring and error mapping."""

import logging

from dotenv import load_dotenv

load_dotenv()

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from practice_api.api.v1 import router as v1_router
from practice_api.core.config import Settings, get_settings
from practice_api.core.database import build_engine, build_session_factory
from practice_api.core.errors import AppError, AuthError, ValidationError
from practice_api.schemas.health import MessageResponse

logger = logging.getLogger(__name__)

# Leading parts of a FastAPI error location that name where a field came from.
_LOCATION_PREFIXES = ("body", "query", "path", "header")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit Settings object."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Student Practice API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix=settings.API_PREFIX)
    _register_error_handlers(app)

    @app.get("/", response_model=MessageResponse)
    def root() -> MessageResponse:
        """Root route; minimal payload for discovery."""
        return MessageResponse(message="Welcome to the Student Practice API")

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Render domain errors as JSON; hide details of anything unexpected."""

    @app.exception_handler(AppError)
    async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        content: dict = {"detail": exc.message}
        headers = None
        if isinstance(exc, ValidationError):
            content["errors"] = exc.errors
        if isinstance(exc, AuthError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": ".".join(
                    str(p) for p in err.get("loc", ()) if p not in _LOCATION_PREFIXES
                ),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def serve() -> None:
    """Run the API with uvicorn on HOST:PORT from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    uvicorn.run(
        "practice_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    serve()
