"""Resource validation — pick the file the command should link to."""

from __future__ import annotations

import logging

from git_web_links.domain.entities import TextEditor
from git_web_links.domain.value_objects import Uri

logger = logging.getLogger(__name__)


def resolve_target(resource: Uri | None, editor: TextEditor | None) -> Uri | None:
    """Return the local file to link to, or ``None`` if there isn't one.

    When the command is run from a menu, *resource* is the file the menu was
    opened from and wins over the active editor.  From the command palette or
    a key binding there is no resource, so the active editor's document is
    used instead.  Only ``file`` URIs are accepted.
    """
    if resource is None and editor is not None:
        resource = editor.document_uri

    if resource is None or not resource.is_file:
        logger.info("File URI scheme is '%s'.", resource.scheme if resource else None)
        return None

    return resource
