import pytest


def test_login_success(client):
    r = client.post("/api/auth/login", json={"username": "admin", "password": "s3cret"})
    assert r.status_code == 200
    assert r.get_json() == {"success": True, "message": "Login successful"}


@pytest.mark.parametrize("username, password", [
    ("admin", "admin"),
    ("invalid", "s3cret"),
    ("", ""),
    ("admin", " s3cret "),
    ("admin", "s3cret\n"),
])
def test_login_rejects_wrong_credentials(client, username, password):
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 401
    assert r.get_json()["success"] is False


@pytest.mark.parametrize("kwargs", [
    {"data": "not json", "content_type": "application/json"},
    {"json": ["admin", "s3cret"]},
    {"json": {"username": "admin"}},
    {"json": {"username": 1, "password": 2}},
])
def test_login_malformed_body(client, kwargs):
    r = client.post("/api/auth/login", **kwargs)
    assert r.status_code == 400
    assert r.get_json()["success"] is False


def test_login_requires_post(client):
    assert client.get("/api/auth/login").status_code == 405
