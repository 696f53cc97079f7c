"""Get-link use case — the resolution-and-generation pipeline.

This is the single entry point for the business logic.  It depends only on
the ports (:class:`RepositoryFinder`, :class:`LinkHandlerProvider` and
:class:`EditorHost`) and the small pure service modules.  The interface layer
injects concrete adapters at runtime.

Every failure ends the pipeline with exactly one notification; nothing raises
past :meth:`GetLinkCommand.execute`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable

from git_web_links.domain.entities import (
    ActionMessageItem,
    FileInfo,
    GetLinkCommandOptions,
    LinkAction,
    LinkOptions,
    NotificationAction,
    RepositoryWithRemote,
    SelectedRange,
    require_remote,
)
from git_web_links.domain.exceptions import ErrorKind, error_kind
from git_web_links.domain.ports.editor_host import EditorHost
from git_web_links.domain.ports.link_handler import LinkHandler, LinkHandlerProvider
from git_web_links.domain.ports.repository_finder import RepositoryFinder
from git_web_links.domain.value_objects import Uri
from git_web_links.services import messages
from git_web_links.services.open_external import open_external
from git_web_links.services.resource import resolve_target
from git_web_links.services.selection import get_selected_range

logger = logging.getLogger(__name__)

SETTINGS_COMMAND = "git-web-links.openSettings"
SETTINGS_SECTION = "git-web-links"


@dataclass(frozen=True, slots=True)
class ResourceInfo:
    """What a single invocation resolved its resource to."""

    uri: Uri
    repository: RepositoryWithRemote
    handler: LinkHandler


# ── Use case ────────────────────────────────────────────────────────────────


class GetLinkCommand:
    """Creates a web link for a file and copies or opens it.

    Parameters
    ----------
    repository_finder:
        Finds the repository (and its remote) that owns a file.
    handler_provider:
        Selects the link handler for a repository's remote.
    host:
        The editor the command runs in: notifications, clipboard, browser.
    options:
        Link type, whether to include the selection, and the action to take.
    """

    def __init__(
        self,
        repository_finder: RepositoryFinder,
        handler_provider: LinkHandlerProvider,
        host: EditorHost,
        options: GetLinkCommandOptions,
    ) -> None:
        self._finder = repository_finder
        self._handlers = handler_provider
        self._host = host
        self._options = options
        self._follow_ups: set[asyncio.Task[None]] = set()

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, resource: Uri | None = None) -> None:
        """Run the pipeline for *resource* (or the active editor's document)."""
        logger.debug("Executing command.")

        editor = self._host.active_text_editor()

        uri = resolve_target(resource, editor)
        if uri is None:
            self._notify(self._host.show_error_message(messages.NO_FILE_SELECTED))
            return

        try:
            info = await self._get_resource_info(uri)
        except Exception:
            logger.exception("Error while resolving the repository of %s", uri)
            self._notify(self._host.show_error_message(messages.GENERIC_ERROR))
            return
        if info is None:
            return

        selection: SelectedRange | None = None
        if self._options.include_selection:
            # The selection can only come from the active editor, so it is
            # only used when the link is for the document in that editor.
            if editor is not None and uri == editor.document_uri:
                selection = get_selected_range(editor)
                logger.debug("Line selection: %s", selection)

        try:
            link = await info.handler.create_url(
                info.repository,
                FileInfo(file_path=uri.fs_path, selection=selection),
                LinkOptions(type=self._options.link_type),
            )
        except Exception as exc:
            if error_kind(exc) is ErrorKind.NO_REMOTE_HEAD:
                logger.info("No remote HEAD: %s", exc)
                self._notify(
                    self._host.show_error_message(
                        messages.no_remote_head(
                            info.repository.root, info.repository.remote.name
                        )
                    )
                )
            else:
                logger.exception("Error while generating a link for %s", uri)
                self._notify(self._host.show_error_message(messages.GENERIC_ERROR))
            return

        logger.info("Web link created: %s", link)

        try:
            await self._dispatch(link, info.handler)
        except Exception:
            logger.exception("Could not %s the link %s", self._options.action.value, link)
            self._notify(self._host.show_error_message(messages.GENERIC_ERROR))

    async def drain(self) -> None:
        """Wait for every outstanding notification follow-up to finish."""
        while self._follow_ups:
            await asyncio.gather(*list(self._follow_ups), return_exceptions=True)

    # ── Resolution ──────────────────────────────────────────────────────

    async def _get_resource_info(self, uri: Uri) -> ResourceInfo | None:
        """Resolve the repository and handler for *uri*, reporting expected failures.

        Errors raised by the finder or the provider propagate to the caller.
        """
        repository = await self._finder.find_repository(uri.fs_path)

        if repository is None:
            logger.info("File is not tracked by Git.")
            self._notify(self._host.show_error_message(messages.not_tracked_by_git(uri)))
            return None

        with_remote = require_remote(repository)
        if with_remote is None:
            logger.info("Repository does not have a remote.")
            self._notify(self._host.show_error_message(messages.no_remote(repository.root)))
            return None

        handler = self._handlers.select(with_remote)
        if handler is None:
            logger.info("No handler for remote '%s'.", with_remote.remote.url)
            self._notify(
                self._host.show_error_message(
                    messages.no_handler(with_remote.remote.url),
                    ActionMessageItem(
                        title=messages.OPEN_SETTINGS,
                        action=NotificationAction.SETTINGS,
                    ),
                )
            )
            return None

        return ResourceInfo(uri=uri, repository=with_remote, handler=handler)

    # ── Actions ─────────────────────────────────────────────────────────

    async def _dispatch(self, link: str, handler: LinkHandler) -> None:
        if self._options.action is LinkAction.COPY:
            await self._host.write_clipboard(link)
            self._notify(
                self._host.show_information_message(
                    messages.link_copied(handler.name),
                    ActionMessageItem(
                        title=messages.OPEN_IN_BROWSER,
                        action=NotificationAction.OPEN,
                    ),
                ),
                link,
            )
        else:
            await open_external(self._host, link)

    def _notify(
        self,
        shown: Awaitable[ActionMessageItem | None],
        link: str | None = None,
    ) -> None:
        """React to the user's choice later, without holding up the command."""

        async def _follow_up() -> None:
            item = await shown
            await self._on_notification_item_click(item, link)

        task = asyncio.create_task(_follow_up())
        self._follow_ups.add(task)
        task.add_done_callback(self._follow_up_done)

    def _follow_up_done(self, task: asyncio.Task[None]) -> None:
        self._follow_ups.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "Notification follow-up failed", exc_info=task.exception()
            )

    async def _on_notification_item_click(
        self, item: ActionMessageItem | None, link: str | None = None
    ) -> None:
        action = item.action if item is not None else None

        if action is NotificationAction.SETTINGS:
            await self._host.execute_command(SETTINGS_COMMAND, SETTINGS_SECTION)
        elif action is NotificationAction.OPEN and link:
            await open_external(self._host, link)
