"""Editor bridge — runs the get-link command on behalf of an editor integration.

The editor integration is a thin client: it posts the invocation context and
applies the *effects* the command produced (clipboard text, URLs to open,
editor commands, notifications).  Notifications with buttons stay pending in
the :class:`NotificationCenter` until the client replies with the button the
user clicked, or with ``None`` when the notification was dismissed.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from git_web_links.domain.entities import (
    ActionMessageItem,
    GetLinkCommandOptions,
    NotificationAction,
    TextEditor,
)
from git_web_links.domain.exceptions import NotificationNotFoundError
from git_web_links.domain.ports.link_handler import LinkHandlerProvider
from git_web_links.domain.ports.repository_finder import RepositoryFinder
from git_web_links.domain.value_objects import Uri
from git_web_links.services.get_link_command import GetLinkCommand

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordedNotification:
    """A notification as shown to the client; ``id`` is set when it has buttons."""

    level: str
    message: str
    items: tuple[ActionMessageItem, ...] = ()
    id: str | None = None


@dataclass(slots=True)
class Effects:
    """Everything a command asked the editor to do."""

    clipboard: str | None = None
    opened: list[str] = field(default_factory=list)
    commands: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)
    notifications: list[RecordedNotification] = field(default_factory=list)


# ── Notification center ─────────────────────────────────────────────────────


@dataclass(slots=True)
class _Pending:
    notification: RecordedNotification
    future: asyncio.Future[ActionMessageItem | None]
    host: BridgeHost


class NotificationCenter:
    """Holds notifications that are waiting for the user's answer.

    At most *max_pending* notifications are kept; the oldest one is treated
    as dismissed when another arrives.
    """

    def __init__(self, max_pending: int = 100) -> None:
        self._max_pending = max_pending
        self._pending: OrderedDict[str, _Pending] = OrderedDict()

    def __len__(self) -> int:
        return len(self._pending)

    def register(
        self, host: BridgeHost, notification: RecordedNotification
    ) -> asyncio.Future[ActionMessageItem | None]:
        """Assign an id to *notification* and return the future of its answer."""
        future: asyncio.Future[ActionMessageItem | None] = (
            asyncio.get_running_loop().create_future()
        )
        notification.id = uuid.uuid4().hex
        self._pending[notification.id] = _Pending(notification, future, host)

        while len(self._pending) > self._max_pending:
            _, oldest = self._pending.popitem(last=False)
            logger.debug("Dismissing unanswered notification %s", oldest.notification.id)
            _resolve(oldest.future, None)

        return future

    def reply(self, notification_id: str, action: NotificationAction | None) -> BridgeHost:
        """Resolve a pending notification and return the host that showed it."""
        pending = self._pending.pop(notification_id, None)
        if pending is None:
            raise NotificationNotFoundError(
                f"Notification '{notification_id}' does not exist or was already answered."
            )

        item = next(
            (i for i in pending.notification.items if i.action is action),
            None,
        )
        if action is not None and item is None:
            logger.warning(
                "Notification %s does not offer '%s'; treating it as dismissed",
                notification_id,
                action.value,
            )
        _resolve(pending.future, item)
        return pending.host

    def dismiss_all(self) -> None:
        """Dismiss every pending notification (used on shutdown)."""
        while self._pending:
            _, pending = self._pending.popitem(last=False)
            _resolve(pending.future, None)


def _resolve(
    future: asyncio.Future[ActionMessageItem | None], item: ActionMessageItem | None
) -> None:
    if not future.done():
        future.set_result(item)


# ── Host ────────────────────────────────────────────────────────────────────


class BridgeHost:
    """Concrete ``EditorHost`` that records effects for the editor client."""

    def __init__(self, center: NotificationCenter, editor: TextEditor | None = None) -> None:
        self._center = center
        self._editor = editor
        self._effects = Effects()
        self._settle: Callable[[], Awaitable[None]] | None = None

    def bind(self, settle: Callable[[], Awaitable[None]]) -> None:
        """Register the coroutine that waits for the command's follow-ups."""
        self._settle = settle

    async def settle(self) -> None:
        if self._settle is not None:
            await self._settle()

    def take_effects(self) -> Effects:
        """Return the effects recorded so far and start a fresh record."""
        effects, self._effects = self._effects, Effects()
        return effects

    # ── EditorHost ──────────────────────────────────────────────────────

    def active_text_editor(self) -> TextEditor | None:
        return self._editor

    def show_error_message(
        self, message: str, *items: ActionMessageItem
    ) -> Awaitable[ActionMessageItem | None]:
        return self._show("error", message, items)

    def show_information_message(
        self, message: str, *items: ActionMessageItem
    ) -> Awaitable[ActionMessageItem | None]:
        return self._show("info", message, items)

    async def write_clipboard(self, text: str) -> None:
        self._effects.clipboard = text

    async def open_external(self, target: str | Uri) -> None:
        self._effects.opened.append(str(target))

    async def execute_command(self, command: str, *args: str) -> None:
        self._effects.commands.append((command, args))

    def _show(
        self, level: str, message: str, items: tuple[ActionMessageItem, ...]
    ) -> Awaitable[ActionMessageItem | None]:
        notification = RecordedNotification(level=level, message=message, items=items)
        self._effects.notifications.append(notification)

        if items:
            return self._center.register(self, notification)

        # Nothing to click, so the notification is answered as soon as it is shown.
        future: asyncio.Future[ActionMessageItem | None] = (
            asyncio.get_running_loop().create_future()
        )
        future.set_result(None)
        return future


# ── Bridge ──────────────────────────────────────────────────────────────────


class EditorBridge:
    """Runs commands for editor clients and routes their notification replies."""

    def __init__(
        self,
        repository_finder: RepositoryFinder,
        handler_provider: LinkHandlerProvider,
        center: NotificationCenter,
    ) -> None:
        self._finder = repository_finder
        self._handlers = handler_provider
        self._center = center

    async def get_link(
        self,
        resource: Uri | None,
        editor: TextEditor | None,
        options: GetLinkCommandOptions,
    ) -> Effects:
        """Run the get-link command and return the effects it produced."""
        host = BridgeHost(self._center, editor)
        command = GetLinkCommand(self._finder, self._handlers, host, options)
        host.bind(command.drain)

        await command.execute(resource)
        return host.take_effects()

    async def reply(self, notification_id: str, action: NotificationAction | None) -> Effects:
        """Answer a notification and return the effects of the follow-up."""
        host = self._center.reply(notification_id, action)
        await host.settle()
        return host.take_effects()
