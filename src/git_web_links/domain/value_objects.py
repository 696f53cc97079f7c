"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import os
import posixpath
import re
from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from git_web_links.domain.exceptions import InvalidUriError

# A scheme needs at least two characters so Windows drive letters ("C:\")
# are still treated as plain paths.
_SCHEME_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]+):")

FILE_SCHEME = "file"


@dataclass(frozen=True, slots=True)
class Uri:
    """A resource identifier as the editor reports it.

    ``file`` URIs carry a decoded, normalised filesystem path, so two
    spellings of the same file (``/a/./b.py`` and ``file:///a/b.py``) compare
    equal.  Every other scheme keeps its path exactly as given.
    """

    scheme: str
    path: str
    authority: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, value: str) -> Uri:
        """Parse a URI string, or a bare filesystem path, into a ``Uri``."""
        text = value.strip()
        if not text:
            raise InvalidUriError("A resource URI must not be empty.")

        if not _SCHEME_RE.match(text):
            return cls.file(text)

        parts = urlsplit(text)
        scheme = parts.scheme.lower()
        if scheme == FILE_SCHEME:
            return cls(
                scheme=FILE_SCHEME,
                authority=parts.netloc,
                path=_normalize_path(unquote(parts.path) or "/"),
                query=parts.query,
                fragment=parts.fragment,
            )
        return cls(
            scheme=scheme,
            authority=parts.netloc,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    @classmethod
    def file(cls, path: str | os.PathLike[str]) -> Uri:
        """Build a ``file`` URI from a local path."""
        return cls(scheme=FILE_SCHEME, path=_normalize_path(os.fspath(path)))

    @property
    def is_file(self) -> bool:
        return self.scheme == FILE_SCHEME

    @property
    def fs_path(self) -> str:
        """The local filesystem path this URI refers to."""
        if self.authority and self.is_file:
            # UNC share
            return f"//{self.authority}{self.path}"
        return self.path

    def __str__(self) -> str:
        if self.is_file:
            path = quote(self.path, safe="/:")
            text = f"file://{self.authority}{path}"
        elif self.authority:
            text = f"{self.scheme}://{self.authority}{self.path}"
        else:
            text = f"{self.scheme}:{self.path}"

        if self.query:
            text += f"?{self.query}"
        if self.fragment:
            text += f"#{self.fragment}"
        return text


def _normalize_path(path: str) -> str:
    normalized = posixpath.normpath(path.replace("\\", "/"))
    # normpath keeps a leading "//", which is not meaningful for local files
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized
