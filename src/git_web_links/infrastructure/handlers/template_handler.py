"""Template-driven link handler — implements the LinkHandler port."""

from __future__ import annotations

import logging
import os
from urllib.parse import quote

from git_web_links.domain.entities import (
    FileInfo,
    LinkOptions,
    LinkType,
    RepositoryWithRemote,
)
from git_web_links.domain.exceptions import (
    GitCommandError,
    LinkGenerationError,
    NoRemoteHeadError,
)
from git_web_links.infrastructure.git import Git
from git_web_links.infrastructure.handlers.definitions import HandlerDefinition
from git_web_links.infrastructure.handlers.remote_url import normalize_remote_url

logger = logging.getLogger(__name__)


class TemplateLinkHandler:
    """Concrete ``LinkHandler`` that fills a :class:`HandlerDefinition`'s templates.

    The reference to link against is read from the local repository: the
    ``HEAD`` commit, the current branch, or the branch the remote's ``HEAD``
    points at.
    """

    def __init__(
        self,
        definition: HandlerDefinition,
        git: Git,
        default_link_type: LinkType = LinkType.COMMIT,
        default_branch: str | None = None,
    ) -> None:
        self._definition = definition
        self._git = git
        self._default_link_type = default_link_type
        self._default_branch = default_branch

    @property
    def name(self) -> str:
        return self._definition.name

    def is_match(self, remote_url: str) -> bool:
        try:
            base = normalize_remote_url(remote_url)
        except ValueError as exc:
            logger.debug("Cannot parse remote URL '%s': %s", remote_url, exc)
            return False
        return self._definition.matches(base)

    async def create_url(
        self,
        repository: RepositoryWithRemote,
        file: FileInfo,
        options: LinkOptions,
    ) -> str:
        """Build the web URL of *file* in *repository*."""
        link_type = options.type or self._default_link_type
        ref = await self._get_ref(repository, link_type)
        path = await self._get_relative_path(file.file_path)

        url = self._definition.url_template.format(
            base=normalize_remote_url(repository.remote.url),
            ref=quote(ref, safe="/"),
            path=quote(path, safe="/"),
        )

        if file.selection is not None:
            url += self._definition.format_selection(file.selection)

        return url

    # ── References ──────────────────────────────────────────────────────

    async def _get_ref(self, repository: RepositoryWithRemote, link_type: LinkType) -> str:
        if link_type is LinkType.BRANCH:
            branch = await self._git.run(repository.root, "rev-parse", "--abbrev-ref", "HEAD")
            if branch != "HEAD":
                return branch
            logger.debug("HEAD is detached in %s; linking to the commit", repository.root)

        elif link_type is LinkType.DEFAULT_BRANCH:
            return await self._get_default_branch(repository)

        return await self._git.run(repository.root, "rev-parse", "HEAD")

    async def _get_default_branch(self, repository: RepositoryWithRemote) -> str:
        remote = repository.remote.name
        try:
            head = await self._git.run(
                repository.root, "symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD"
            )
        except GitCommandError as exc:
            if self._default_branch:
                logger.debug(
                    "Remote %s has no HEAD; using the configured default branch", remote
                )
                return self._default_branch
            raise NoRemoteHeadError(repository.root, remote) from exc

        return head.removeprefix(f"{remote}/")

    # ── Paths ───────────────────────────────────────────────────────────

    async def _get_relative_path(self, file_path: str) -> str:
        """Return the repository-relative, ``/``-separated path of *file_path*."""
        directory = os.path.dirname(file_path) or "."
        relative = await self._git.run(
            directory, "ls-files", "-z", "--full-name", "--", os.path.basename(file_path)
        )
        if not relative:
            raise LinkGenerationError(f"'{file_path}' is not tracked by the repository.")
        return relative.split("\0")[0]
