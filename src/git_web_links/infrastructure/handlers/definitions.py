"""Handler definitions — how each hosting service lays out its file URLs."""

from __future__ import annotations

import re
from typing import Sequence

from pydantic import BaseModel, field_validator

from git_web_links.domain.entities import SelectedRange


class HandlerDefinition(BaseModel):
    """Declarative description of one hosting service.

    Templates are ``str.format`` strings.  ``url_template`` receives ``base``
    (the normalised remote URL), ``ref`` and ``path``; the selection templates
    receive ``start_line`` and ``end_line``.
    """

    name: str
    server_patterns: list[str]
    url_template: str
    single_line_template: str
    multi_line_template: str

    @field_validator("server_patterns")
    @classmethod
    def _must_compile(cls, v: list[str]) -> list[str]:
        if not v:
            msg = "A handler needs at least one server pattern."
            raise ValueError(msg)
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as exc:
                msg = f"Invalid server pattern '{pattern}': {exc}"
                raise ValueError(msg) from exc
        return v

    def matches(self, base_url: str) -> bool:
        """Return True when *base_url* belongs to this hosting service."""
        return any(re.match(pattern, base_url) for pattern in self.server_patterns)

    def format_selection(self, selection: SelectedRange) -> str:
        if selection.start_line == selection.end_line:
            return self.single_line_template.format(start_line=selection.start_line)
        return self.multi_line_template.format(
            start_line=selection.start_line, end_line=selection.end_line
        )


# ── Built-in services ───────────────────────────────────────────────────────


def github(server_patterns: Sequence[str] = (r"^https?://github\.com/",)) -> HandlerDefinition:
    return HandlerDefinition(
        name="GitHub",
        server_patterns=list(server_patterns),
        url_template="{base}/blob/{ref}/{path}",
        single_line_template="#L{start_line}",
        multi_line_template="#L{start_line}-L{end_line}",
    )


def gitlab(server_patterns: Sequence[str] = (r"^https?://gitlab\.com/",)) -> HandlerDefinition:
    return HandlerDefinition(
        name="GitLab",
        server_patterns=list(server_patterns),
        url_template="{base}/-/blob/{ref}/{path}",
        single_line_template="#L{start_line}",
        multi_line_template="#L{start_line}-{end_line}",
    )


def bitbucket() -> HandlerDefinition:
    return HandlerDefinition(
        name="Bitbucket",
        server_patterns=[r"^https?://bitbucket\.org/"],
        url_template="{base}/src/{ref}/{path}",
        single_line_template="#lines-{start_line}",
        multi_line_template="#lines-{start_line}:{end_line}",
    )


def server_pattern(server: str) -> str:
    """Build a server pattern that matches ``http`` or ``https`` URLs on *server*."""
    host = re.sub(r"^[a-z][a-z0-9+.\-]*://", "", server.strip(), flags=re.IGNORECASE)
    host = host.rstrip("/").lower()
    return rf"^https?://{re.escape(host)}/"


def build_definitions(
    github_enterprise_servers: Sequence[str] = (),
    gitlab_servers: Sequence[str] = (),
) -> list[HandlerDefinition]:
    """Return the built-in definitions followed by the configured servers."""
    definitions = [github(), gitlab(), bitbucket()]
    if github_enterprise_servers:
        definitions.append(github([server_pattern(s) for s in github_enterprise_servers]))
    if gitlab_servers:
        definitions.append(gitlab([server_pattern(s) for s in gitlab_servers]))
    return definitions
