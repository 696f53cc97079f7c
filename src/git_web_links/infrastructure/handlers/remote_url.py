"""Remote URL normalisation — map any git remote URL to its web base URL."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

# git@github.com:owner/repo.git
_SCP_LIKE_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>(?!//).+)$")


def normalize_remote_url(url: str) -> str:
    """Return the ``http(s)://host/path`` form of a remote URL.

    User names, ports of non-HTTP transports and a trailing ``.git`` are
    dropped, so ``git@github.com:owner/repo.git`` and
    ``ssh://git@github.com:22/owner/repo`` both become
    ``https://github.com/owner/repo``.

    Raises ``ValueError`` when the URL has a malformed port or IPv6 host.
    """
    text = url.strip()

    if "://" not in text:
        match = _SCP_LIKE_RE.match(text)
        if match:
            return _join("https", match["host"], match["path"])
        return _strip_suffix(text)

    parts = urlsplit(text)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""

    if scheme in ("http", "https"):
        if parts.port:
            host = f"{host}:{parts.port}"
        return _join(scheme, host, parts.path)

    # ssh://, git://, git+ssh:// all browse over https without the transport port
    return _join("https", host, parts.path)


def _join(scheme: str, host: str, path: str) -> str:
    return _strip_suffix(f"{scheme}://{host.lower()}/{path.lstrip('/')}")


def _strip_suffix(url: str) -> str:
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url
