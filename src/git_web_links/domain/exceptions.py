"""Domain exception hierarchy.

Every exception carries a ``kind`` tag.  Callers branch on the tag once, at
the point where a failure becomes a user-facing message, instead of testing
class identity across module boundaries.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator carried by every domain error."""

    UNKNOWN = "unknown"
    INVALID_URI = "invalid-uri"
    GIT = "git"
    NO_REMOTE_HEAD = "no-remote-head"
    GENERATION = "generation"
    NOTIFICATION_NOT_FOUND = "notification-not-found"


class GitWebLinksError(Exception):
    """Base exception for the entire application."""

    kind: ErrorKind = ErrorKind.UNKNOWN


# ── Input validation ────────────────────────────────────────────────────────


class InvalidUriError(GitWebLinksError):
    """A resource string could not be interpreted as a URI or path."""

    kind = ErrorKind.INVALID_URI


# ── Git errors ──────────────────────────────────────────────────────────────


class GitCommandError(GitWebLinksError):
    """A ``git`` invocation exited with a non-zero status."""

    kind = ErrorKind.GIT

    def __init__(self, args: tuple[str, ...], returncode: int, stderr: str = "") -> None:
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"git {' '.join(args)} exited with status {returncode}: {stderr.strip()}"
        )


# ── Link generation errors ──────────────────────────────────────────────────


class NoRemoteHeadError(GitWebLinksError):
    """The remote has no HEAD ref, so there is no default branch to link to."""

    kind = ErrorKind.NO_REMOTE_HEAD

    def __init__(self, root: str, remote_name: str) -> None:
        self.root = root
        self.remote_name = remote_name
        super().__init__(
            f"The remote '{remote_name}' of the repository '{root}' has no HEAD ref."
        )


class LinkGenerationError(GitWebLinksError):
    """A handler failed to produce a URL for any other reason."""

    kind = ErrorKind.GENERATION


# ── Bridge errors ───────────────────────────────────────────────────────────


class NotificationNotFoundError(GitWebLinksError):
    """A reply targeted a notification that is unknown or already answered."""

    kind = ErrorKind.NOTIFICATION_NOT_FOUND


def error_kind(exc: BaseException) -> ErrorKind:
    """Return the kind tag of *exc*; foreign exceptions are ``UNKNOWN``."""
    kind = getattr(exc, "kind", None)
    return kind if isinstance(kind, ErrorKind) else ErrorKind.UNKNOWN
