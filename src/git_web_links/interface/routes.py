"""API routes — thin controllers that delegate to the editor bridge."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from git_web_links.domain.entities import GetLinkCommandOptions
from git_web_links.domain.value_objects import Uri
from git_web_links.infrastructure.config import Settings
from git_web_links.interface.bridge import EditorBridge
from git_web_links.interface.dependencies import get_app_settings, get_bridge
from git_web_links.interface.schemas import (
    EffectsResponse,
    ErrorResponse,
    GetLinkRequest,
    ReplyRequest,
)

router = APIRouter()


@router.post(
    "/commands/get-link",
    response_model=EffectsResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed resource or editor state"},
        500: {"model": ErrorResponse, "description": "Unexpected server error"},
    },
)
async def get_link(
    body: GetLinkRequest,
    bridge: EditorBridge = Depends(get_bridge),
    settings: Settings = Depends(get_app_settings),
) -> EffectsResponse:
    """Create a web link for a file and return what the editor should do."""
    options = GetLinkCommandOptions(
        link_type=body.link_type,
        include_selection=(
            settings.include_selection
            if body.include_selection is None
            else body.include_selection
        ),
        action=body.action or settings.default_action,
    )
    effects = await bridge.get_link(
        Uri.parse(body.resource) if body.resource else None,
        body.editor.to_domain() if body.editor else None,
        options,
    )
    return EffectsResponse.from_effects(effects)


@router.post(
    "/notifications/{notification_id}/reply",
    response_model=EffectsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown or already answered notification"},
        422: {"model": ErrorResponse, "description": "Unknown action"},
    },
)
async def reply(
    notification_id: str,
    body: ReplyRequest,
    bridge: EditorBridge = Depends(get_bridge),
) -> EffectsResponse:
    """Report the button the user clicked (or a dismissal) on a notification."""
    effects = await bridge.reply(notification_id, body.action)
    return EffectsResponse.from_effects(effects)
