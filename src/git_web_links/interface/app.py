"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from git_web_links.infrastructure.config import Settings, get_settings
from git_web_links.interface.dependencies import shutdown, startup
from git_web_links.interface.error_handlers import register_error_handlers
from git_web_links.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the bridge from the app's settings; dismiss what is left on exit."""
    await startup(app.state.settings)
    yield
    await shutdown()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the bridge application.

    *settings* defaults to the environment; the CLI passes its overrides here.
    """
    app = FastAPI(
        title="Git Web Links",
        version="1.0.0",
        description=(
            "Local bridge for editor integrations: creates links to files "
            "(and selected lines) on their repository's hosting service."
        ),
        lifespan=_lifespan,
    )
    app.state.settings = settings or get_settings()

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
