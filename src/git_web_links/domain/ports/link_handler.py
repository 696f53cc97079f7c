"""Port: link handlers — one strategy per hosting provider."""

from __future__ import annotations

from typing import Protocol

from git_web_links.domain.entities import (
    FileInfo,
    LinkOptions,
    RepositoryWithRemote,
)


class LinkHandler(Protocol):
    """Builds a web URL for a file on one kind of hosting service."""

    @property
    def name(self) -> str:
        """Display name of the hosting service (e.g. ``"GitHub"``)."""
        ...

    async def create_url(
        self,
        repository: RepositoryWithRemote,
        file: FileInfo,
        options: LinkOptions,
    ) -> str:
        """Return the URL of *file*.

        Raises ``NoRemoteHeadError`` when no reference can be resolved to link
        against; any other exception is an unclassified failure.
        """
        ...


class LinkHandlerProvider(Protocol):
    """Picks the handler whose remote URL pattern matches a repository."""

    def select(self, repository: RepositoryWithRemote) -> LinkHandler | None:
        """Return at most one handler, or ``None`` when nothing matches."""
        ...
