import asyncio
import uuid
from types import SimpleNamespace

import pytest
from starlette.websockets import WebSocketDisconnect

from teamlink.models.enums import NotificationType
from teamlink.services import notifications_service as notify
from teamlink.services.notifications_service import NotificationHub
from teamlink.tests.helpers import make_token, settings

PREFIX = settings.api_prefix


class FakeSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.accepted = False
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, payload):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(payload)


def _project():
    return SimpleNamespace(id=uuid.uuid4(), title="Apollo")


def test_event_builders():
    project = _project()
    application = SimpleNamespace(id=uuid.uuid4(), user_id=uuid.uuid4())
    team_row = SimpleNamespace(user_id=application.user_id, role_title="Backend Developer")

    received = notify.application_received(application, project, "sam")
    assert received.id == f"app_received_{application.id}"
    assert received.type == NotificationType.application_received
    assert received.message == 'sam has applied to your project "Apollo"'
    assert received.data["applicationId"] == str(application.id)

    accepted = notify.application_accepted(project, team_row)
    assert accepted.id == f"app_accepted_{project.id}_{application.user_id}"
    assert accepted.data["roleTitle"] == "Backend Developer"
    assert "as Backend Developer" in accepted.message

    rejected = notify.application_rejected(project, application)
    assert rejected.id == f"app_rejected_{project.id}_{application.user_id}"
    assert rejected.data == {"projectId": str(project.id), "projectTitle": "Apollo"}


def test_hub_delivers_to_connected_user_only():
    hub = NotificationHub()
    ws = FakeSocket()
    event = notify.application_rejected(_project(), SimpleNamespace(user_id="u1"))

    async def scenario():
        await hub.connect(ws, "u1")
        delivered = await hub.send_to_user("u1", event)
        dropped = await hub.send_to_user("u2", event)
        return delivered, dropped

    delivered, dropped = asyncio.run(scenario())
    assert ws.accepted
    assert delivered is True
    assert dropped is False
    assert ws.sent[0]["type"] == "application_rejected"
    assert ws.sent[0]["id"] == event.id


def test_hub_drops_broken_socket():
    hub = NotificationHub()
    ws = FakeSocket(fail=True)
    event = notify.application_rejected(_project(), SimpleNamespace(user_id="u1"))

    async def scenario():
        await hub.connect(ws, "u1")
        return await hub.send_to_user("u1", event)

    assert asyncio.run(scenario()) is False
    assert not hub.is_connected("u1")


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    async def record(user_id, event):
        sent.append((user_id, event))
        return True

    monkeypatch.setattr(notify.hub, "send_to_user", record)
    return sent


def test_application_events_are_pushed(api, outbox):
    pid = api.project("Signal")
    owner_id = api.me("leader", leader=True)["id"]
    applicant_id = api.me("fl")["id"]

    aid = api.apply(pid, "fl").json()["id"]
    assert outbox[-1][0] == owner_id
    assert outbox[-1][1].id == f"app_received_{aid}"
    assert outbox[-1][1].data["applicantName"] == "fl"

    api.decide(pid, aid, "accepted", role_title="Designer")
    assert outbox[-1][0] == applicant_id
    assert outbox[-1][1].type == NotificationType.application_accepted
    assert outbox[-1][1].data["roleTitle"] == "Designer"


def test_rejection_event(api, outbox):
    pid = api.project("Signal")
    aid = api.apply(pid, "fl").json()["id"]
    api.decide(pid, aid, "rejected")
    assert outbox[-1][1].type == NotificationType.application_rejected


def test_repeated_decision_pushes_once(api, outbox):
    pid = api.project("Echo")
    aid = api.apply(pid, "fl").json()["id"]
    before = len(outbox)

    assert api.decide(pid, aid, "accepted").status_code == 200
    assert api.decide(pid, aid, "accepted").status_code == 200
    pushed = outbox[before:]
    assert [e.type for _, e in pushed] == [NotificationType.application_accepted]


def test_failed_decision_pushes_nothing(api, outbox):
    pid = api.project("Quiet")
    aid = api.apply(pid, "fl").json()["id"]
    before = len(outbox)
    assert api.decide(pid, aid, "accepted", owner="intruder").status_code == 403
    assert len(outbox) == before


def test_socket_requires_valid_token(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"{PREFIX}/ws/notifications?token=bogus"):
            pass


def test_socket_ping(client):
    token = make_token("ws-user")
    with client.websocket_connect(f"{PREFIX}/ws/notifications?token={token}") as ws:
        ws.send_text("ping")
        assert ws.receive_text() == "pong"
