"""Live channel tests — /ws over Starlette's TestClient.

Learn: TestClient is used as a context manager so every WebSocket in a
test shares one event loop (and the lifespan runs). The welcome frame
doubles as a sync point: once a client has it, its registration is
done.
"""

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from pedal.auth.jwt import issue_token
from pedal.main import create_app


@pytest.fixture()
def live_app():
    return create_app()


def test_welcome_frame(live_app):
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=ram") as ws:
            welcome = ws.receive_json()
            assert welcome == {"type": "welcome", "identity": "ram", "online": 1}
            assert live_app.state.registry.count() == 1


def test_anonymous_identity(live_app):
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json()["identity"] == "anonymous"


def test_message_rebroadcast_to_all(live_app):
    """Whatever one client sends, every client (sender included) receives."""
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=u1") as ws1:
            ws1.receive_json()
            with client.websocket_connect("/ws?user_id=u2") as ws2:
                assert ws2.receive_json()["online"] == 2

                ws1.send_json({"type": "chat", "text": "hi all"})
                assert ws1.receive_json() == {"type": "chat", "text": "hi all"}
                assert ws2.receive_json() == {"type": "chat", "text": "hi all"}


def test_disconnect_unregisters(live_app):
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=u1") as ws:
            ws.receive_json()
        assert live_app.state.registry.count() == 0


def test_non_object_frame_ends_session(live_app):
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=u1") as ws:
            ws.receive_json()
            ws.send_text("definitely not json")
            with pytest.raises(WebSocketDisconnect) as exc:
                ws.receive_text()
            assert exc.value.code == 1003
        assert live_app.state.registry.count() == 0


def test_same_identity_supersedes(live_app):
    """A second connection for an identity replaces (and closes) the first."""
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=u1") as old:
            old.receive_json()
            with client.websocket_connect("/ws?user_id=u1") as new:
                assert new.receive_json()["online"] == 1
                with pytest.raises(WebSocketDisconnect) as exc:
                    old.receive_text()
                assert exc.value.code == 4000

                new.send_json({"type": "still here"})
                assert new.receive_json() == {"type": "still here"}
            assert live_app.state.registry.count() == 0


def test_disabled_websocket_flag_refuses(live_app):
    live_app.state.stores.config.update(features={"websocket": False})
    with TestClient(live_app) as client:
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/ws?user_id=u1") as ws:
                ws.receive_json()
        assert exc.value.code == 1013
    assert live_app.state.registry.count() == 0


def test_api_event_reaches_socket(live_app):
    """A post created over HTTP shows up on the live channel."""
    with TestClient(live_app) as client:
        with client.websocket_connect("/ws?user_id=watcher") as ws:
            ws.receive_json()
            live_app.state.stores.users.create(
                user_id="poster", name="Poster", email="poster@pedal.com",
                password_hash="x",
            )
            r = client.post(
                "/api/social/posts",
                json={"text": "live from HTTP"},
                headers={"Authorization": f"Bearer {issue_token('poster')}"},
            )
            assert r.status_code == 201
            event = ws.receive_json()
            assert event["type"] == "post.created"
            assert event["post"]["text"] == "live from HTTP"
