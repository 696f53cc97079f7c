"""Port: editor host — the editor services the get-link command talks to."""

from __future__ import annotations

from typing import Awaitable, Protocol

from git_web_links.domain.entities import ActionMessageItem, TextEditor
from git_web_links.domain.value_objects import Uri


class EditorHost(Protocol):
    """Abstract contract for the editor the command runs inside."""

    def active_text_editor(self) -> TextEditor | None:
        """Return the focused text editor, if any."""
        ...

    def show_error_message(
        self, message: str, *items: ActionMessageItem
    ) -> Awaitable[ActionMessageItem | None]:
        """Show an error; the awaitable resolves to the clicked item or ``None``."""
        ...

    def show_information_message(
        self, message: str, *items: ActionMessageItem
    ) -> Awaitable[ActionMessageItem | None]:
        """Show an information message; resolves like ``show_error_message``."""
        ...

    async def write_clipboard(self, text: str) -> None:
        """Replace the clipboard contents with *text*."""
        ...

    async def open_external(self, target: str | Uri) -> None:
        """Open *target* with the system's default handler (a web browser)."""
        ...

    async def execute_command(self, command: str, *args: str) -> None:
        """Run an editor command by its identifier."""
        ...
