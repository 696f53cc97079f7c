"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from git_web_links.domain.entities import LinkAction, LinkType


class Settings(BaseSettings):
    """Central configuration loaded from ``GIT_WEB_LINKS_*`` env vars (or ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_WEB_LINKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    link_type: LinkType = LinkType.COMMIT
    include_selection: bool = True
    default_action: LinkAction = LinkAction.COPY
    default_branch: str | None = None
    github_enterprise_servers: list[str] = []
    gitlab_servers: list[str] = []
    git_executable: str = "git"
    max_pending_notifications: int = 100
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8734


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
