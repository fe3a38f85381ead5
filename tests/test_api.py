"""HTTP surface: auth, error bodies and the main flows end to end."""

import jwt
import pytest
from starlette.websockets import WebSocketDisconnect

from zfounders.config.settings import TestingConfig
from zfounders.domain.value_objects import AccountType, SubscriptionTier, VisibilityClass

from tests.conftest import auth, make_user, make_video, mint_token


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_missing_token_is_401(client):
    response = client.post("/api/messages", json={"recipientId": "x", "content": "hi"})
    assert response.status_code == 401


def test_bad_signature_is_401(client, store):
    user = make_user(store, AccountType.FOUNDER)
    token = mint_token(user.id, secret="not-the-secret")
    response = client.get("/api/feed", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["reason"] == "unauthorized"


def test_expired_token_is_401(client, store):
    user = make_user(store, AccountType.FOUNDER)
    token = mint_token(user.id, expires_in=-60)
    response = client.get("/api/users/me/blocked", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Token has expired"


def test_token_for_unknown_user_is_401(client):
    token = jwt.encode(
        {"userId": "00000000-0000-4000-8000-000000000000", "exp": 4102444800},
        TestingConfig.JWT_SECRET,
        algorithm="HS256",
    )
    response = client.get("/api/users/me/blocked", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_malformed_id_is_404(client, store):
    user = make_user(store, AccountType.FOUNDER)
    response = client.get("/api/videos/not-a-uuid", headers=auth(user))
    assert response.status_code == 404
    assert response.json()["reason"] == "not_found"


def test_quota_error_shape(client, store):
    founder = make_user(store, AccountType.FOUNDER)
    investor = make_user(store, AccountType.INVESTOR)
    body = {"recipientId": investor.id.value, "content": "Hello"}
    for _ in range(3):
        assert client.post("/api/messages", json=body, headers=auth(founder)).status_code == 201

    response = client.post("/api/messages", json=body, headers=auth(founder))
    assert response.status_code == 429
    payload = response.json()
    assert payload["reason"] == "monthly_limit"
    assert payload["resets_at"] == "2025-04-01T00:00:00+00:00"
    assert payload["upgrade_url"] == "/api/subscriptions/plans"


def test_lurker_denial_shape(client, store):
    lurker = make_user(store, AccountType.LURKER)
    founder = make_user(store, AccountType.FOUNDER)
    response = client.post(
        "/api/messages",
        json={"recipientId": founder.id.value, "content": "hi"},
        headers=auth(lurker),
    )
    assert response.status_code == 403
    assert response.json() == {
        "error": "Lurkers cannot send messages. Please upgrade your account.",
        "reason": "account_type",
        "hint": "upgrade",
        "upgrade_url": "/api/subscriptions/plans",
    }


def test_request_accept_flow(client, store):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)

    sent = client.post(
        "/api/messages",
        json={"recipientId": founder.id.value, "content": "Intro?"},
        headers=auth(investor),
    )
    assert sent.status_code == 201
    assert sent.json()["status"] == "REQUEST"
    conversation_id = sent.json()["conversation"]["id"]

    requests = client.get("/api/conversations/requests", headers=auth(founder)).json()
    assert [c["id"] for c in requests["conversations"]] == [conversation_id]

    denied = client.post(f"/api/conversations/{conversation_id}/accept", headers=auth(investor))
    assert denied.status_code == 403

    accepted = client.post(f"/api/conversations/{conversation_id}/accept", headers=auth(founder))
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "ACTIVE"

    again = client.post(f"/api/conversations/{conversation_id}/decline", headers=auth(founder))
    assert again.status_code == 409
    assert again.json()["reason"] == "invalid_transition"

    reply = client.post(
        f"/api/conversations/{conversation_id}/messages",
        json={"content": "Sure"},
        headers=auth(founder),
    )
    assert reply.status_code == 201

    messages = client.get(
        f"/api/conversations/{conversation_id}/messages", headers=auth(investor)
    ).json()
    assert [m["content"] for m in messages["messages"]] == ["Intro?", "Sure"]


def test_interest_flow(client, store):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    pitch = make_video(store, founder)

    created = client.post(
        "/api/express-interest",
        json={"founderId": founder.id.value, "videoId": pitch.id.value},
        headers=auth(investor),
    )
    assert created.status_code == 201
    interest_id = created.json()["id"]

    received = client.get("/api/express-interest/received", headers=auth(founder)).json()
    assert received[0]["investor"]["is_private"] is True

    bad_action = client.patch(
        f"/api/express-interest/{interest_id}",
        json={"action": "maybe"},
        headers=auth(founder),
    )
    assert bad_action.status_code == 400

    accepted = client.patch(
        f"/api/express-interest/{interest_id}",
        json={"action": "accept"},
        headers=auth(founder),
    )
    assert accepted.status_code == 200
    assert accepted.json()["conversation_id"]


def test_video_endpoints(client, store):
    founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
    pending = make_user(store, AccountType.INVESTOR, verified=False)

    created = client.post(
        "/api/videos",
        json={
            "videoUrl": "https://cdn.example.com/pitch.mp4",
            "type": "PITCH",
            "visibility": VisibilityClass.INVESTORS_ONLY.value,
            "duration": 60,
        },
        headers=auth(founder),
    )
    assert created.status_code == 201
    video_id = created.json()["id"]

    feed = client.get("/api/feed", headers=auth(pending)).json()
    assert video_id not in [v["id"] for v in feed["videos"]]

    detail = client.get(f"/api/videos/{video_id}", headers=auth(pending))
    assert detail.status_code == 403
    assert detail.json()["reason"] == "verification_required"
    assert detail.json()["hint"] == "verify"

    anonymous = client.get(f"/api/videos/{video_id}")
    assert anonymous.status_code == 401

    analytics = client.get(f"/api/videos/{video_id}/analytics", headers=auth(founder))
    assert analytics.status_code == 200
    assert analytics.json()["premium"] is True

    too_long = client.post(
        "/api/videos",
        json={"videoUrl": "https://cdn.example.com/long.mp4", "duration": 300},
        headers=auth(founder),
    )
    assert too_long.status_code == 400


def test_block_and_profile_endpoints(client, store):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)

    followed = client.post(f"/api/users/{b.id.value}/follow", headers=auth(a))
    assert followed.json() == {"success": True, "changed": True}

    blocked = client.post(f"/api/users/{a.id.value}/block", headers=auth(b))
    assert blocked.status_code == 200
    assert store.follows == {}

    listing = client.get("/api/users/me/blocked", headers=auth(b)).json()
    assert [row["blocked_id"] for row in listing["blocked"]] == [a.id.value]

    message = client.post(
        "/api/messages",
        json={"recipientId": b.id.value, "content": "hi"},
        headers=auth(a),
    )
    assert message.status_code == 403
    assert message.json()["reason"] == "blocked"

    profile = client.get(f"/api/users/{b.id.value}")
    assert profile.status_code == 200
    assert profile.json()["account_type"] == "BUILDER"


def test_account_switch_endpoint(client, store):
    lurker = make_user(store, AccountType.LURKER)
    response = client.patch(
        "/api/users/me/account-type",
        json={"accountType": "FOUNDER"},
        headers=auth(lurker),
    )
    assert response.status_code == 200
    assert response.json()["account_type"] == "FOUNDER"


def test_moderation_requires_admin(client, store):
    founder = make_user(store, AccountType.FOUNDER)
    investor = make_user(store, AccountType.INVESTOR, verified=False)
    response = client.post(
        f"/api/moderation/verifications/{investor.id.value}",
        json={"approve": True},
        headers=auth(founder),
    )
    assert response.status_code == 403
    assert response.json()["reason"] == "admin_required"


def test_metrics_endpoint(client):
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_server_request_duration_seconds" in response.text


def test_websocket_rejects_bad_token(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws?token=nope") as ws:
            ws.receive_json()
    assert exc_info.value.code == 1008


def test_websocket_ping_and_notification(client, store):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    with client.websocket_connect(f"/ws?token={mint_token(b.id)}") as ws:
        ws.send_text("ping")
        assert ws.receive_json() == {"event": "pong"}

        client.post(f"/api/users/{b.id.value}/follow", headers=auth(a))
        event = ws.receive_json()
        assert event["event"] == "notification"
        assert event["type"] == "new_follower"


def test_privacy_settings_endpoint(client, store):
    investor = make_user(store, AccountType.INVESTOR, display_name="Sam")
    response = client.patch(
        "/api/users/me/privacy",
        json={"isPublicMode": True, "allowMessagesFromEveryone": False},
        headers=auth(investor),
    )
    assert response.status_code == 200
    assert response.json() == {"allow_messages_from_everyone": False, "is_public_mode": True}

    profile = client.get(f"/api/users/{investor.id.value}").json()
    assert profile["display_name"] == "Sam"

    founder = make_user(store, AccountType.FOUNDER)
    rejected = client.patch(
        "/api/users/me/privacy", json={"isPublicMode": True}, headers=auth(founder)
    )
    assert rejected.status_code == 400


def test_notification_inbox_endpoints(client, store):
    fan = make_user(store, AccountType.FOUNDER)
    target = make_user(store, AccountType.BUILDER)
    client.post(f"/api/users/{target.id.value}/follow", headers=auth(fan))

    inbox = client.get("/api/notifications", headers=auth(target)).json()
    assert inbox["unread_count"] == 1
    [notification] = inbox["notifications"]
    assert notification["type"] == "new_follower"

    foreign = client.patch(
        f"/api/notifications/{notification['id']}/read", headers=auth(fan)
    )
    assert foreign.status_code == 404

    marked = client.patch(
        f"/api/notifications/{notification['id']}/read", headers=auth(target)
    )
    assert marked.json() == {"success": True, "changed": True}
    unread = client.get(
        "/api/notifications", params={"unreadOnly": "true"}, headers=auth(target)
    ).json()
    assert unread == {"notifications": [], "unread_count": 0}

    read_all = client.patch("/api/notifications/read-all", headers=auth(target))
    assert read_all.json() == {"success": True, "changed": False}
