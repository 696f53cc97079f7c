"""Open a URL through the editor host, tolerating its re-encoding defect."""

from __future__ import annotations

import logging

from git_web_links.domain.ports.editor_host import EditorHost
from git_web_links.domain.value_objects import Uri

logger = logging.getLogger(__name__)


async def open_external(host: EditorHost, link: str) -> None:
    """Open *link* in the browser.

    Some hosts decode and re-encode URI objects before opening them, which
    unescapes characters the handler escaped on purpose.  The raw string is
    tried first; only if the host rejects it is a parsed ``Uri`` passed.
    """
    try:
        await host.open_external(link)
    except Exception:
        logger.debug("Opening '%s' as a string failed; retrying with a Uri.", link, exc_info=True)
        await host.open_external(Uri.parse(link))
