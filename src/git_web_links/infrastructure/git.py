"""Thin async wrapper around the ``git`` executable."""

from __future__ import annotations

import asyncio
import logging

from git_web_links.domain.exceptions import GitCommandError

logger = logging.getLogger(__name__)


class Git:
    """Runs ``git`` commands in a working directory and returns their stdout."""

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    async def run(self, cwd: str, *args: str) -> str:
        """Run ``git <args>`` in *cwd*; raise :class:`GitCommandError` on failure.

        Only the trailing line break is removed from the output, so paths that
        start or end with spaces survive.
        """
        logger.debug("git %s (in %s)", " ".join(args), cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                self._executable,
                *args,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GitCommandError(args, -1, str(exc)) from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise GitCommandError(
                args, process.returncode or -1, stderr.decode("utf-8", "replace")
            )
        return stdout.decode("utf-8", "replace").rstrip("\n")
