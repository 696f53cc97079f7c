"""Fixtures for git_web_links tests."""

from __future__ import annotations

import asyncio
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from git_web_links.domain.entities import (
    ActionMessageItem,
    FileInfo,
    LinkOptions,
    Remote,
    Repository,
    RepositoryWithRemote,
)
from git_web_links.domain.exceptions import NoRemoteHeadError
from git_web_links.domain.value_objects import Uri

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@dataclass
class ShownNotification:
    level: str
    message: str
    items: tuple[ActionMessageItem, ...]
    future: asyncio.Future


class FakeHost:
    """An ``EditorHost`` whose notifications are answered by the test."""

    def __init__(self, editor=None, reject_string_urls: bool = False) -> None:
        self.editor = editor
        self.reject_string_urls = reject_string_urls
        self.notifications: list[ShownNotification] = []
        self.clipboard: list[str] = []
        self.opened: list[str | Uri] = []
        self.commands: list[tuple[str, tuple[str, ...]]] = []

    def active_text_editor(self):
        return self.editor

    def show_error_message(self, message, *items):
        return self._show("error", message, items)

    def show_information_message(self, message, *items):
        return self._show("info", message, items)

    async def write_clipboard(self, text):
        self.clipboard.append(text)

    async def open_external(self, target):
        if self.reject_string_urls and isinstance(target, str):
            raise TypeError("expected a Uri")
        self.opened.append(target)

    async def execute_command(self, command, *args):
        self.commands.append((command, args))

    def answer(self, index: int, item: ActionMessageItem | None) -> None:
        """Simulate the user clicking *item* (or dismissing with ``None``)."""
        self.notifications[index].future.set_result(item)

    def _show(self, level, message, items):
        future = asyncio.get_running_loop().create_future()
        if not items:
            future.set_result(None)
        self.notifications.append(ShownNotification(level, message, items, future))
        return future


@dataclass
class FakeHandler:
    """A ``LinkHandler`` that builds predictable URLs and records its calls."""

    name: str = "GitHub"
    error: Exception | None = None
    calls: list[tuple[RepositoryWithRemote, FileInfo, LinkOptions]] = field(default_factory=list)

    async def create_url(self, repository, file, options):
        self.calls.append((repository, file, options))
        if self.error is not None:
            raise self.error
        url = f"https://github.com/owner/repo/blob/main{file.file_path}"
        if file.selection is not None:
            url += f"#L{file.selection.start_line}-L{file.selection.end_line}"
        return url


class FakeProvider:
    def __init__(self, handler: FakeHandler | None) -> None:
        self.handler = handler
        self.calls = 0

    def select(self, repository):
        self.calls += 1
        return self.handler


@pytest.fixture
def repository() -> Repository:
    return Repository(root="/r", remote=Remote(name="origin", url="git@github.com:owner/repo.git"))


@pytest.fixture
def finder(repository: Repository) -> AsyncMock:
    mock = AsyncMock()
    mock.find_repository.return_value = repository
    return mock


@pytest.fixture
def handler() -> FakeHandler:
    return FakeHandler()


@pytest.fixture
def provider(handler: FakeHandler) -> FakeProvider:
    return FakeProvider(handler)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def no_remote_head_handler() -> FakeHandler:
    return FakeHandler(error=NoRemoteHeadError("/r", "origin"))


# ── Real git repositories ───────────────────────────────────────────────────


def run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository with one commit on ``main`` and a GitHub ``origin`` remote."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "app.py").write_text("print('hello')\n")
    (root / "docs").mkdir()
    (root / "docs" / "read me.md").write_text("# Docs\n")

    run_git(root, "init", "--quiet")
    run_git(root, "checkout", "--quiet", "-b", "main")
    run_git(root, "config", "user.email", "dev@example.com")
    run_git(root, "config", "user.name", "Dev")
    run_git(root, "config", "commit.gpgsign", "false")
    run_git(root, "add", ".")
    run_git(root, "commit", "--quiet", "-m", "Initial commit")
    run_git(root, "remote", "add", "origin", "git@github.com:owner/project.git")
    return root
