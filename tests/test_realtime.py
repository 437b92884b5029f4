"""
Tests for the admin notification channel
"""
import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from faculty_eval import state
from faculty_eval.core.notifier import ADMIN_ROOM, ConnectionHub, EVENT_SUBMITTED, NullNotifier
from faculty_eval.main import app

from conftest import answers_with_correct, login


class FakeSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(message)


async def test_hub_fans_out_to_room():
    hub = ConnectionHub()
    first, second, other = FakeSocket(), FakeSocket(), FakeSocket()
    hub.join(ADMIN_ROOM, first)
    hub.join(ADMIN_ROOM, second)
    hub.join("elsewhere", other)

    await hub.publish(ADMIN_ROOM, EVENT_SUBMITTED, {"employeeId": "FAC001"})

    expected = {"event": EVENT_SUBMITTED, "data": {"employeeId": "FAC001"}}
    assert first.sent == [expected]
    assert second.sent == [expected]
    assert other.sent == []


async def test_hub_drops_dead_sockets_silently():
    """A failed send never raises and the socket is removed"""
    hub = ConnectionHub()
    alive, dead = FakeSocket(), FakeSocket(fail=True)
    hub.join(ADMIN_ROOM, alive)
    hub.join(ADMIN_ROOM, dead)

    await hub.publish(ADMIN_ROOM, EVENT_SUBMITTED, {})

    assert len(alive.sent) == 1
    assert hub.subscriber_count(ADMIN_ROOM) == 1


async def test_publish_to_empty_room():
    await ConnectionHub().publish(ADMIN_ROOM, EVENT_SUBMITTED, {})


async def test_null_notifier():
    assert await NullNotifier().publish(ADMIN_ROOM, EVENT_SUBMITTED, {}) is None


@pytest.fixture
def live_client(store, participant, admin, monkeypatch):
    """Client sharing one event loop with its WebSockets, real hub, no seeding"""
    monkeypatch.setattr(state, "STORE", store)
    monkeypatch.setattr(state, "HUB", ConnectionHub())
    monkeypatch.setattr(state.SETTINGS, "seed_file", None)
    with TestClient(app) as client:
        yield client


def test_admin_socket_receives_submission(live_client):
    admin_token = login(live_client, "admin@faculty.com", "admin123")["Authorization"].split()[1]
    participant_headers = login(live_client, "faculty1@faculty.com", "password123")

    with live_client.websocket_connect(f"/ws/admin?token={admin_token}") as websocket:
        response = live_client.post("/api/evaluations", json={"answers": answers_with_correct(20)},
                                    headers=participant_headers)
        assert response.status_code == 200

        message = websocket.receive_json()
        assert message["event"] == EVENT_SUBMITTED
        assert message["data"]["employeeId"] == "FAC001"
        assert message["data"]["quizScore"] == 40


def test_participant_socket_rejected(live_client):
    token = login(live_client, "faculty1@faculty.com", "password123")["Authorization"].split()[1]
    with pytest.raises(WebSocketDisconnect):
        with live_client.websocket_connect(f"/ws/admin?token={token}") as websocket:
            websocket.receive_json()


def test_socket_without_token_rejected(live_client):
    with pytest.raises(WebSocketDisconnect):
        with live_client.websocket_connect("/ws/admin") as websocket:
            websocket.receive_json()
