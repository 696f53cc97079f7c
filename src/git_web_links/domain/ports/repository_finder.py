"""Port: repository finder — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from git_web_links.domain.entities import Repository


class RepositoryFinder(Protocol):
    """Abstract contract for locating the repository that owns a file."""

    async def find_repository(self, file_path: str) -> Repository | None:
        """Return the repository containing *file_path*, or ``None`` if untracked."""
        ...
