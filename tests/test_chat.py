from datetime import datetime

import pytest

from halalgains import create_app
from halalgains.extensions import db, socketio
from halalgains.models import Conversation, Message
from halalgains.services.accounts import issue_token
from halalgains.utils.timefmt import format_message_time


@pytest.fixture
def pair(make_coach, make_client):
    return make_coach("Ali Hassan"), make_client("Omar Farouk")


def start(client, user, coach, auth_headers):
    resp = client.post("/api/conversations", json={"coach_id": coach.id}, headers=auth_headers(user))
    return resp, resp.get_json().get("conversation")


def test_format_message_time():
    now = datetime(2024, 3, 15, 18, 0)
    assert format_message_time(datetime(2024, 3, 15, 9, 5), now) == "09:05"
    assert format_message_time(datetime(2024, 3, 14, 23, 59), now) == "Yesterday"
    assert format_message_time(datetime(2024, 3, 11, 12, 0), now) == "Mon"
    assert format_message_time(datetime(2024, 3, 4, 12, 0), now) == "Mar 4"


def test_get_or_create_is_idempotent(client, pair, auth_headers):
    coach, user = pair
    resp, first = start(client, user, coach, auth_headers)
    assert resp.status_code == 201
    resp, second = start(client, user, coach, auth_headers)
    assert resp.status_code == 200
    assert first["id"] == second["id"]
    assert Conversation.query.count() == 1


def test_only_clients_start_conversations(client, pair, auth_headers):
    coach, _ = pair
    resp = client.post("/api/conversations", json={"coach_id": coach.id}, headers=auth_headers(coach))
    assert resp.status_code == 403


def test_send_message_reactivates_conversation(client, pair, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)
    url = f"/api/conversations/{conversation['id']}"

    assert client.delete(url, headers=auth_headers(user)).status_code == 200
    assert client.delete(url, headers=auth_headers(coach)).status_code == 200
    assert client.get("/api/conversations", headers=auth_headers(user)).get_json()["conversations"] == []
    assert client.get("/api/conversations", headers=auth_headers(coach)).get_json()["conversations"] == []

    resp = client.post(f"{url}/messages", json={"content": "  Salam, coach!  "}, headers=auth_headers(user))
    assert resp.status_code == 201
    assert resp.get_json()["message"]["content"] == "Salam, coach!"

    row = db.session.get(Conversation, conversation["id"])
    db.session.refresh(row)
    assert row.deleted_by_client is False
    assert row.deleted_by_coach is False
    assert len(client.get("/api/conversations", headers=auth_headers(coach)).get_json()["conversations"]) == 1


def test_empty_message_rejected(client, pair, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)
    resp = client.post(
        f"/api/conversations/{conversation['id']}/messages", json={"content": "   "}, headers=auth_headers(user)
    )
    assert resp.status_code == 400
    assert Message.query.count() == 0


def test_unread_counts_and_mark_read_on_open(client, pair, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)
    url = f"/api/conversations/{conversation['id']}/messages"
    client.post(url, json={"content": "First"}, headers=auth_headers(user))
    client.post(url, json={"content": "Second"}, headers=auth_headers(user))
    client.post(url, json={"content": "Reply"}, headers=auth_headers(coach))

    listing = client.get("/api/conversations", headers=auth_headers(coach)).get_json()["conversations"][0]
    assert listing["unread_count"] == 2
    assert listing["last_message"] == "Reply"
    assert listing["other_party"]["name"] == "Omar Farouk"

    client_view = client.get("/api/conversations", headers=auth_headers(user)).get_json()["conversations"][0]
    assert client_view["unread_count"] == 1
    assert client_view["other_party"]["name"] == "Ali Hassan"

    messages = client.get(url, headers=auth_headers(coach)).get_json()["messages"]
    assert [m["content"] for m in messages] == ["First", "Second", "Reply"]

    listing = client.get("/api/conversations", headers=auth_headers(coach)).get_json()["conversations"][0]
    assert listing["unread_count"] == 0
    client_view = client.get("/api/conversations", headers=auth_headers(user)).get_json()["conversations"][0]
    assert client_view["unread_count"] == 1


def test_mark_single_message_read(client, pair, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)
    resp = client.post(
        f"/api/conversations/{conversation['id']}/messages", json={"content": "Hi"}, headers=auth_headers(user)
    )
    message_id = resp.get_json()["message"]["id"]

    assert client.post(f"/api/messages/{message_id}/read", headers=auth_headers(user)).status_code == 400
    resp = client.post(f"/api/messages/{message_id}/read", headers=auth_headers(coach))
    assert resp.status_code == 200
    assert resp.get_json()["message"]["is_read"] is True


def test_outsiders_cannot_read(client, pair, make_client, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)
    stranger = make_client("Stranger")
    resp = client.get(f"/api/conversations/{conversation['id']}/messages", headers=auth_headers(stranger))
    assert resp.status_code == 403
    assert client.get("/api/conversations/999/messages", headers=auth_headers(user)).status_code == 404


def test_realtime_message_delivery(app, client, pair, make_client, auth_headers):
    coach, user = pair
    _, conversation = start(client, user, coach, auth_headers)

    listener = socketio.test_client(app, flask_test_client=client)
    listener.emit("join_conversation", {"conversation_id": conversation["id"], "token": issue_token(coach.user)})
    joined = listener.get_received()
    assert joined[-1]["name"] == "joined"

    outsider = socketio.test_client(app, flask_test_client=client)
    outsider.emit("join_conversation", {
        "conversation_id": conversation["id"], "token": issue_token(make_client("Stranger")),
    })
    assert outsider.get_received()[-1]["name"] == "error"

    client.post(
        f"/api/conversations/{conversation['id']}/messages", json={"content": "Live"}, headers=auth_headers(user)
    )
    events = [e for e in listener.get_received() if e["name"] == "new_message"]
    assert events[0]["args"][0]["content"] == "Live"
    assert not [e for e in outsider.get_received() if e["name"] == "new_message"]

    listener.disconnect()
    outsider.disconnect()


def test_join_requires_valid_token(app, client):
    sock = socketio.test_client(app, flask_test_client=client)
    sock.emit("join_user", {"token": "not-a-token"})
    assert sock.get_received()[-1]["args"][0] == {"msg": "Unauthorized"}
    sock.disconnect()


def test_socket_events_bound_for_every_app(tmp_path):
    for n in range(2):
        app = create_app("testing", overrides={"UPLOAD_FOLDER": str(tmp_path / f"uploads{n}")})
        sock = socketio.test_client(app)
        sock.emit("join_user", {"token": "not-a-token"})
        assert sock.get_received()[-1]["args"][0] == {"msg": "Unauthorized"}
        sock.disconnect()
