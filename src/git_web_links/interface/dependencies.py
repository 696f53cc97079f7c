"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Request

from git_web_links.infrastructure.config import Settings
from git_web_links.infrastructure.git import Git
from git_web_links.infrastructure.git_repository_finder import GitRepositoryFinder
from git_web_links.infrastructure.handlers.provider import build_handler_provider
from git_web_links.interface.bridge import EditorBridge, NotificationCenter

_bridge: EditorBridge | None = None
_center: NotificationCenter | None = None


async def startup(settings: Settings) -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _bridge, _center  # noqa: PLW0603

    git = Git(settings.git_executable)
    _center = NotificationCenter(max_pending=settings.max_pending_notifications)
    _bridge = EditorBridge(
        repository_finder=GitRepositoryFinder(git),
        handler_provider=build_handler_provider(settings, git),
        center=_center,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _bridge, _center  # noqa: PLW0603

    if _center:
        _center.dismiss_all()
        _center = None
    _bridge = None


def get_bridge() -> EditorBridge:
    """Return the bridge created at startup."""
    assert _bridge is not None, "startup() was not called"
    return _bridge


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
