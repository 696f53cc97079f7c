"""Handler selection — implements the LinkHandlerProvider port."""

from __future__ import annotations

import logging
from typing import Sequence

from git_web_links.domain.entities import RepositoryWithRemote
from git_web_links.infrastructure.config import Settings
from git_web_links.infrastructure.git import Git
from git_web_links.infrastructure.handlers.definitions import build_definitions
from git_web_links.infrastructure.handlers.template_handler import TemplateLinkHandler

logger = logging.getLogger(__name__)


class TemplateHandlerProvider:
    """Selects the first handler, in declaration order, matching the remote."""

    def __init__(self, handlers: Sequence[TemplateLinkHandler]) -> None:
        self._handlers = list(handlers)

    def select(self, repository: RepositoryWithRemote) -> TemplateLinkHandler | None:
        for handler in self._handlers:
            if handler.is_match(repository.remote.url):
                logger.debug("Selected %s for %s", handler.name, repository.remote.url)
                return handler
        return None


def build_handler_provider(settings: Settings, git: Git) -> TemplateHandlerProvider:
    """Create the provider for the built-in and configured hosting services."""
    definitions = build_definitions(
        github_enterprise_servers=settings.github_enterprise_servers,
        gitlab_servers=settings.gitlab_servers,
    )
    return TemplateHandlerProvider(
        [
            TemplateLinkHandler(
                definition,
                git,
                default_link_type=settings.link_type,
                default_branch=settings.default_branch,
            )
            for definition in definitions
        ]
    )
