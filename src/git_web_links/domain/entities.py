"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from git_web_links.domain.value_objects import Uri


class LinkType(str, Enum):
    """Which kind of git reference a generated URL is pinned to."""

    COMMIT = "commit"
    BRANCH = "branch"
    DEFAULT_BRANCH = "defaultBranch"


class LinkAction(str, Enum):
    """What the command does with the URL once it has been created."""

    COPY = "copy"
    OPEN = "open"


class NotificationAction(str, Enum):
    """Tag of the single button a notification may offer."""

    SETTINGS = "settings"
    OPEN = "open"


# ── Repositories ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Remote:
    """A named reference to a hosted copy of the repository."""

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class Repository:
    """A local working copy, as found by the repository finder."""

    root: str
    remote: Remote | None = None


@dataclass(frozen=True, slots=True)
class RepositoryWithRemote:
    """A repository that is known to have a remote."""

    root: str
    remote: Remote


def require_remote(repository: Repository) -> RepositoryWithRemote | None:
    """Upgrade *repository* when it has a remote, otherwise return ``None``."""
    if repository.remote is None:
        return None
    return RepositoryWithRemote(root=repository.root, remote=repository.remote)


# ── Editor state ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Position:
    """A zero-based line/character position in a document."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Selection:
    """A selection as the editor reports it: the anchor may follow the cursor."""

    anchor: Position
    active: Position

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active, key=_position_key)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active, key=_position_key)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active


@dataclass(frozen=True, slots=True)
class TextEditor:
    """The active editor: the document it shows and its selections."""

    document_uri: Uri
    selections: tuple[Selection, ...] = ()

    @property
    def selection(self) -> Selection | None:
        """The primary selection, if the editor reported any."""
        return self.selections[0] if self.selections else None


@dataclass(frozen=True, slots=True)
class SelectedRange:
    """A one-based line/column span within a file."""

    start_line: int
    end_line: int
    start_column: int | None = None
    end_column: int | None = None


# ── Link generation ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FileInfo:
    """The file (and optional range) a link is created for."""

    file_path: str
    selection: SelectedRange | None = None


@dataclass(frozen=True, slots=True)
class LinkOptions:
    """Per-call handler options; ``type=None`` defers to the settings."""

    type: LinkType | None = None


@dataclass(frozen=True, slots=True)
class GetLinkCommandOptions:
    """Options that control how the get-link command behaves."""

    link_type: LinkType | None = None
    include_selection: bool = True
    action: LinkAction = LinkAction.COPY


@dataclass(frozen=True, slots=True)
class ActionMessageItem:
    """A notification button with an associated action."""

    title: str
    action: NotificationAction


def _position_key(position: Position) -> tuple[int, int]:
    return (position.line, position.character)
