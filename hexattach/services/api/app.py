# hexattach/services/api/app.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hexattach.common.logging import get_logger
from hexattach.common.settings import get_settings
from hexattach.domain.errors import (
    NotFoundError, StoreConflictError, StoreError, UnsupportedOperationError,
)
from hexattach.services.api.routers import health, media, host_media

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
logger = get_logger(__name__)


def _error(status: HTTPStatus, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status, content={"detail": str(exc)})


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError):
        return _error(HTTPStatus.NOT_FOUND, exc)

    @app.exception_handler(UnsupportedOperationError)
    async def _unsupported(_: Request, exc: UnsupportedOperationError):
        return _error(HTTPStatus.NOT_IMPLEMENTED, exc)

    @app.exception_handler(StoreConflictError)
    async def _conflict(_: Request, exc: StoreConflictError):
        return _error(HTTPStatus.CONFLICT, exc)

    @app.exception_handler(StoreError)
    async def _store(_: Request, exc: StoreError):
        logger.error("store failure: %s", exc, exc_info=exc.__cause__ or exc)
        return _error(HTTPStatus.SERVICE_UNAVAILABLE, exc)

    # tag validation (non-string / empty tags) from the domain
    @app.exception_handler(ValueError)
    async def _invalid(_: Request, exc: ValueError):
        return _error(HTTPStatus.UNPROCESSABLE_ENTITY, exc)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Hexattach API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    install_error_handlers(app)

    app.include_router(health.router)
    app.include_router(media.router)
    app.include_router(host_media.router)
    return app

app = create_app()
