"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tarefas.core.config import Settings, get_settings, settings as default_settings
from tarefas.core.errors import (
    AuthenticationError,
    BaseError,
    ConflictError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.providers.factory import create_store
from tarefas.server.api import auth, health, tasks, users

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[BaseError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ProviderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "message": message})


async def _handle_app_error(request: Request, exc: BaseError) -> JSONResponse:
    status_code = next(
        (code for err_type, code in _STATUS_BY_ERROR if isinstance(exc, err_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_dict())
        return _error_response(status_code, "Erro interno do servidor.")
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc.to_dict())
    response = _error_response(status_code, exc.message)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(p) for p in first.get("loc", ()))
    message = f"Requisição inválida: {location} {first.get('msg', '')}".strip()
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[KeyValueStoreProvider] = None,
) -> FastAPI:
    """Build the application.

    Args:
        app_settings: Settings to use (defaults to the process-wide instance)
        store: Pre-built store; when omitted one is created from the settings
    """
    cfg = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting %s %s...", cfg.APP_NAME, cfg.VERSION)
        app.state.store = store or create_store(cfg)
        await app.state.store.initialize()
        yield
        logger.info("Shutting down %s...", cfg.APP_NAME)
        await app.state.store.shutdown()

    app = FastAPI(
        title=cfg.APP_NAME,
        description="Backend API for task management",
        version=cfg.VERSION,
        debug=cfg.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if app_settings is not None:
        app.dependency_overrides[get_settings] = lambda: cfg

    app.add_exception_handler(BaseError, _handle_app_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)

    prefix = cfg.API_PREFIX
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(auth.router, prefix=prefix, tags=["authentication"])
    app.include_router(tasks.router, prefix=f"{prefix}/tasks", tags=["tasks"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"message": f"{cfg.APP_NAME} API", "version": cfg.VERSION}

    return app


app = create_app()
