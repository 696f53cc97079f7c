"""Git-backed repository finder — implements the RepositoryFinder port."""

from __future__ import annotations

import logging
import os

from git_web_links.domain.entities import Remote, Repository
from git_web_links.domain.exceptions import GitCommandError
from git_web_links.infrastructure.git import Git

logger = logging.getLogger(__name__)

_PREFERRED_REMOTE = "origin"


class GitRepositoryFinder:
    """Concrete ``RepositoryFinder`` that asks the local ``git`` executable.

    Only local state is read; no command here touches the network.
    """

    def __init__(self, git: Git) -> None:
        self._git = git

    async def find_repository(self, file_path: str) -> Repository | None:
        """Return the repository tracking *file_path*, or ``None``."""
        directory = os.path.dirname(file_path) or "."
        if not os.path.isdir(directory):
            logger.debug("Directory %s does not exist", directory)
            return None

        try:
            root = await self._git.run(directory, "rev-parse", "--show-toplevel")
            await self._git.run(
                directory, "ls-files", "--error-unmatch", "--", os.path.basename(file_path)
            )
        except GitCommandError as exc:
            logger.debug("%s is not tracked: %s", file_path, exc)
            return None

        return Repository(root=root, remote=await self._find_remote(root))

    async def _find_remote(self, root: str) -> Remote | None:
        """Pick ``origin`` if it exists, otherwise the first configured remote."""
        try:
            names = (await self._git.run(root, "remote")).split()
        except GitCommandError:
            logger.debug("Could not list the remotes of %s", root, exc_info=True)
            return None

        if not names:
            return None

        name = _PREFERRED_REMOTE if _PREFERRED_REMOTE in names else names[0]
        try:
            url = await self._git.run(root, "remote", "get-url", name)
        except GitCommandError:
            logger.debug("Remote %s of %s has no URL", name, root, exc_info=True)
            return None

        return Remote(name=name, url=url)
