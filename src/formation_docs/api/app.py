"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formation_docs.api.auth import require_auth
from formation_docs.api.middleware.error_handler import register_error_handlers
from formation_docs.api.routes import generate, health
from formation_docs.core.config import AppSettings
from formation_docs.core.startup_checks import validate_settings
from formation_docs.engine import DocumentGenerationEngine
from formation_docs.hooks import setup_logging


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("formation-docs")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: AppSettings | None = None,
    engine: DocumentGenerationEngine | None = None,
) -> FastAPI:
    """Build the API. *settings* and *engine* default to env-driven instances at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        resolved = settings or AppSettings()
        validate_settings(resolved)
        setup_logging(resolved.observability)

        app.state.settings = resolved
        app.state.engine = engine or DocumentGenerationEngine(resolved)
        yield

    api_config = (settings or AppSettings()).api
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(generate.router, dependencies=[Depends(require_auth)])
    return app


app = create_app()
