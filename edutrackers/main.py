"""FastAPI entry point: app factory, error mapping and table initialisation."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from edutrackers import __version__
from edutrackers.api import router as api_router
from edutrackers.config import get_settings
from edutrackers.db import Base, engine, ensure_database_directory
from edutrackers.errors import AuthorizationDenied, ConstraintViolation, ReferentialFailure

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def register_error_handlers(app: FastAPI) -> None:
    """Report the data-core error taxonomy as HTTP responses."""

    @app.exception_handler(AuthorizationDenied)
    async def authorization_denied(_request: Request, exc: AuthorizationDenied):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": str(exc), "entity": exc.entity, "operation": exc.operation},
        )

    @app.exception_handler(ConstraintViolation)
    async def constraint_violation(_request: Request, exc: ConstraintViolation):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "constraint": exc.constraint},
        )

    @app.exception_handler(ReferentialFailure)
    async def referential_failure(_request: Request, exc: ReferentialFailure):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Application factory, so tests can build isolated apps."""

    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="EduTrackers API", version=__version__)

    @app.on_event("startup")
    def init_models() -> None:
        ensure_database_directory(engine)
        Base.metadata.create_all(bind=engine)
        logger.info("database schema ready")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    register_error_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
