"""Tests for the editor bridge and its HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FakeHandler, FakeProvider

from git_web_links.domain.entities import (
    ActionMessageItem,
    GetLinkCommandOptions,
    LinkAction,
    NotificationAction,
)
from git_web_links.domain.exceptions import NotificationNotFoundError
from git_web_links.domain.value_objects import Uri
from git_web_links.infrastructure.config import Settings
from git_web_links.interface.app import create_app
from git_web_links.interface.bridge import (
    BridgeHost,
    EditorBridge,
    NotificationCenter,
    RecordedNotification,
)
from git_web_links.interface.dependencies import get_bridge
from git_web_links.services import messages
from git_web_links.services.get_link_command import SETTINGS_COMMAND

LINK = "https://github.com/owner/repo/blob/main/r/src/a.py"
OPEN = ActionMessageItem(title=messages.OPEN_IN_BROWSER, action=NotificationAction.OPEN)


class TestNotificationCenter:
    """Tests for NotificationCenter."""

    @pytest.mark.asyncio
    async def test_reply_resolves_clicked_item(self):
        """Test that replying resolves the future with the matching item."""
        center = NotificationCenter()
        host = BridgeHost(center)
        notification = RecordedNotification(level="info", message="m", items=(OPEN,))
        future = center.register(host, notification)

        assert center.reply(notification.id, NotificationAction.OPEN) is host
        assert await future == OPEN
        assert len(center) == 0

    @pytest.mark.asyncio
    async def test_reply_unknown(self):
        """Test that an unknown id is rejected."""
        with pytest.raises(NotificationNotFoundError):
            NotificationCenter().reply("missing", None)

    @pytest.mark.asyncio
    async def test_reply_twice(self):
        """Test that a notification can only be answered once."""
        center = NotificationCenter()
        notification = RecordedNotification(level="info", message="m", items=(OPEN,))
        center.register(BridgeHost(center), notification)
        center.reply(notification.id, None)

        with pytest.raises(NotificationNotFoundError):
            center.reply(notification.id, NotificationAction.OPEN)

    @pytest.mark.asyncio
    async def test_action_not_offered(self):
        """Test that an action the notification does not offer counts as a dismissal."""
        center = NotificationCenter()
        notification = RecordedNotification(level="info", message="m", items=(OPEN,))
        future = center.register(BridgeHost(center), notification)

        center.reply(notification.id, NotificationAction.SETTINGS)
        assert await future is None

    @pytest.mark.asyncio
    async def test_oldest_dismissed_when_full(self):
        """Test that the oldest notification is dismissed beyond the limit."""
        center = NotificationCenter(max_pending=1)
        host = BridgeHost(center)
        first = center.register(host, RecordedNotification("info", "1", (OPEN,)))
        center.register(host, RecordedNotification("info", "2", (OPEN,)))

        assert await first is None
        assert len(center) == 1


class TestEditorBridge:
    """Tests for EditorBridge."""

    @pytest.mark.asyncio
    async def test_copy_then_open(self, finder, provider):
        """Test that the reply to the copy notification returns the URL to open."""
        bridge = EditorBridge(finder, provider, NotificationCenter())
        effects = await bridge.get_link(
            Uri.file("/r/src/a.py"), None, GetLinkCommandOptions(action=LinkAction.COPY)
        )

        assert effects.clipboard == LINK
        assert effects.opened == []
        notification = effects.notifications[0]

        follow_up = await bridge.reply(notification.id, NotificationAction.OPEN)
        assert follow_up.opened == [LINK]
        assert follow_up.clipboard is None

    @pytest.mark.asyncio
    async def test_dismissed(self, finder, provider):
        """Test that dismissing the copy notification has no effects."""
        bridge = EditorBridge(finder, provider, NotificationCenter())
        effects = await bridge.get_link(
            Uri.file("/r/src/a.py"), None, GetLinkCommandOptions(action=LinkAction.COPY)
        )

        follow_up = await bridge.reply(effects.notifications[0].id, None)
        assert follow_up.opened == []
        assert follow_up.commands == []

    @pytest.mark.asyncio
    async def test_plain_error_has_no_id(self, finder, provider):
        """Test that notifications without buttons are not kept pending."""
        center = NotificationCenter()
        bridge = EditorBridge(finder, provider, center)
        effects = await bridge.get_link(
            Uri.parse("untitled:Untitled-1"), None, GetLinkCommandOptions()
        )

        assert [n.message for n in effects.notifications] == [messages.NO_FILE_SELECTED]
        assert effects.notifications[0].id is None
        assert len(center) == 0


@pytest.fixture
def client(finder, handler):
    """A test client whose bridge uses the fake finder and handler."""
    app = create_app()
    bridge = EditorBridge(finder, FakeProvider(handler), NotificationCenter())
    app.dependency_overrides[get_bridge] = lambda: bridge
    with TestClient(app) as test_client:
        yield test_client


class TestApi:
    """Tests for the HTTP routes."""

    def test_health(self, client):
        """Test the liveness probe."""
        assert client.get("/health").json() == {"status": "ok"}

    def test_copy_with_selection(self, client, handler):
        """Test a copy request with the active editor's selection."""
        response = client.post(
            "/commands/get-link",
            json={
                "editor": {
                    "uri": "file:///r/src/a.py",
                    "selections": [
                        {"anchor": {"line": 2, "character": 0}, "active": {"line": 4, "character": 1}}
                    ],
                },
                "action": "copy",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["clipboard"] == f"{LINK}#L3-L5"
        assert body["notifications"][0]["actions"] == [
            {"title": messages.OPEN_IN_BROWSER, "action": "open"}
        ]
        assert handler.calls[0][2].type is None

    def test_reply_open(self, client):
        """Test that replying "open" returns the URL to open."""
        body = client.post(
            "/commands/get-link", json={"resource": "/r/src/a.py", "action": "copy"}
        ).json()
        notification_id = body["notifications"][0]["id"]

        response = client.post(
            f"/notifications/{notification_id}/reply", json={"action": "open"}
        )

        assert response.status_code == 200
        assert response.json()["opened"] == [LINK]

    def test_open_action(self, client):
        """Test that the open action returns the URL to open right away."""
        body = client.post(
            "/commands/get-link",
            json={"resource": "file:///r/src/a.py", "action": "open", "link_type": "branch"},
        ).json()

        assert body["opened"] == [LINK]
        assert body["clipboard"] is None
        assert body["notifications"] == []

    def test_no_handler_settings(self, finder):
        """Test that the settings button requests the settings command."""
        app = create_app()
        bridge = EditorBridge(finder, FakeProvider(None), NotificationCenter())
        app.dependency_overrides[get_bridge] = lambda: bridge

        with TestClient(app) as client:
            body = client.post("/commands/get-link", json={"resource": "/r/src/a.py"}).json()
            notification = body["notifications"][0]
            assert notification["level"] == "error"

            reply = client.post(
                f"/notifications/{notification['id']}/reply", json={"action": "settings"}
            ).json()

        assert [c["command"] for c in reply["commands"]] == [SETTINGS_COMMAND]

    def test_generation_failure(self, finder):
        """Test that a failing handler gives the generic message, not a server error."""
        app = create_app()
        handler = FakeHandler(error=RuntimeError("boom"))
        bridge = EditorBridge(finder, FakeProvider(handler), NotificationCenter())
        app.dependency_overrides[get_bridge] = lambda: bridge

        with TestClient(app) as client:
            response = client.post("/commands/get-link", json={"resource": "/r/src/a.py"})

        assert response.status_code == 200
        assert [n["message"] for n in response.json()["notifications"]] == [
            messages.GENERIC_ERROR
        ]

    def test_unknown_notification(self, client):
        """Test that replying to an unknown notification is a 404."""
        response = client.post("/notifications/nope/reply", json={"action": None})

        assert response.status_code == 404
        assert response.json()["status"] == "error"

    def test_invalid_link_type(self, client):
        """Test that an unknown link type is rejected."""
        response = client.post(
            "/commands/get-link", json={"resource": "/r/src/a.py", "link_type": "tag"}
        )

        assert response.status_code == 422
        assert "link_type" in response.json()["message"]

    def test_blank_resource(self, client):
        """Test that a blank resource URI is rejected."""
        response = client.post("/commands/get-link", json={"resource": "   "})

        assert response.status_code == 422
        assert response.json()["status"] == "error"

    def test_error_model_documented(self, client):
        """Test that the error envelope is part of the published schema."""
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/notifications/{notification_id}/reply"]["post"]["responses"]

        assert responses["404"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }


class TestAppSettings:
    """Tests for settings passed to the application factory."""

    def test_request_defaults_come_from_app_settings(self, finder, handler):
        """Test that the factory's settings supply the request defaults."""
        app = create_app(Settings(include_selection=False, default_action=LinkAction.OPEN))
        bridge = EditorBridge(finder, FakeProvider(handler), NotificationCenter())
        app.dependency_overrides[get_bridge] = lambda: bridge

        with TestClient(app) as client:
            body = client.post(
                "/commands/get-link",
                json={
                    "editor": {
                        "uri": "file:///r/src/a.py",
                        "selections": [
                            {"anchor": {"line": 2, "character": 0}, "active": {"line": 4, "character": 1}}
                        ],
                    },
                },
            ).json()

        assert body["opened"] == [LINK]
        assert body["clipboard"] is None
        assert handler.calls[0][1].selection is None
