"""Pydantic request / response DTOs for the bridge API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from git_web_links.domain.entities import (
    LinkAction,
    LinkType,
    NotificationAction,
    Position,
    Selection,
    TextEditor,
)
from git_web_links.domain.value_objects import Uri
from git_web_links.interface.bridge import Effects


class PositionSchema(BaseModel):
    """A zero-based position in a document."""

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class SelectionSchema(BaseModel):
    anchor: PositionSchema
    active: PositionSchema


class EditorSchema(BaseModel):
    """The active editor: its document URI and selections (primary first)."""

    uri: str
    selections: list[SelectionSchema] = []

    @field_validator("uri")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "uri must not be empty."
            raise ValueError(msg)
        return v

    def to_domain(self) -> TextEditor:
        return TextEditor(
            document_uri=Uri.parse(self.uri),
            selections=tuple(
                Selection(
                    anchor=Position(s.anchor.line, s.anchor.character),
                    active=Position(s.active.line, s.active.character),
                )
                for s in self.selections
            ),
        )


class GetLinkRequest(BaseModel):
    """Request body for ``POST /commands/get-link``.

    Options left out fall back to the server settings.
    """

    resource: str | None = None
    editor: EditorSchema | None = None
    link_type: LinkType | None = None
    include_selection: bool | None = None
    action: LinkAction | None = None


class ReplyRequest(BaseModel):
    """Request body for ``POST /notifications/{id}/reply``; ``null`` = dismissed."""

    action: NotificationAction | None = None


class NotificationItemSchema(BaseModel):
    title: str
    action: NotificationAction


class NotificationSchema(BaseModel):
    id: str | None = None
    level: str
    message: str
    actions: list[NotificationItemSchema] = []


class CommandSchema(BaseModel):
    command: str
    args: list[str] = []


class EffectsResponse(BaseModel):
    """What the editor client should do on behalf of the command."""

    clipboard: str | None = None
    opened: list[str] = []
    commands: list[CommandSchema] = []
    notifications: list[NotificationSchema] = []

    @classmethod
    def from_effects(cls, effects: Effects) -> EffectsResponse:
        return cls(
            clipboard=effects.clipboard,
            opened=list(effects.opened),
            commands=[
                CommandSchema(command=command, args=list(args))
                for command, args in effects.commands
            ],
            notifications=[
                NotificationSchema(
                    id=n.id,
                    level=n.level,
                    message=n.message,
                    actions=[
                        NotificationItemSchema(title=i.title, action=i.action)
                        for i in n.items
                    ],
                )
                for n in effects.notifications
            ],
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
