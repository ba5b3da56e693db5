from teamlink.core.config import get_settings

PREFIX = get_settings().api_prefix


def test_health(client):
    r = client.get(f"{PREFIX}/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["request_id"]
    assert r.json()["service"] == "TeamLink API"


def test_request_id_is_echoed(client):
    r = client.get(f"{PREFIX}/health", headers={"X-Request-Id": "rid-123"})
    assert r.headers["X-Request-Id"] == "rid-123"
    assert r.json()["request_id"] == "rid-123"


def test_missing_token_is_unauthenticated(client):
    r = client.get(f"{PREFIX}/users/profile")
    assert r.status_code == 401
    assert r.json() == {"detail": "Not authenticated.", "error": "unauthenticated"}


def test_garbage_token_is_unauthenticated(client):
    r = client.get(f"{PREFIX}/users/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"
