import pytest


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.parametrize(
    "method,path",
    [("get", "/api/users"), ("get", "/api/users/1"), ("delete", "/api/users/1")],
)
def test_user_routes_require_token(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 401


def test_list_and_get(client, alice):
    h = _bearer(alice["token"])
    r = client.get("/api/users", headers=h)
    assert r.status_code == 200
    assert r.json() == [alice["user"]]

    uid = alice["user"]["id"]
    assert client.get(f"/api/users/{uid}", headers=h).json() == alice["user"]
    assert client.get(f"/api/users/{uid + 1}", headers=h).status_code == 404


def test_invalid_user_id_format(client, alice):
    r = client.get("/api/users/abc", headers=_bearer(alice["token"]))
    assert r.status_code == 400


def test_partial_update(client, alice):
    h = _bearer(alice["token"])
    uid = alice["user"]["id"]

    r = client.put(f"/api/users/{uid}", json={"fullName": "Alice Liddell"}, headers=h)
    assert r.status_code == 200
    assert r.json() == {"message": "User updated successfully"}

    after = client.get(f"/api/users/{uid}", headers=h).json()
    assert after == {**alice["user"], "fullName": "Alice Liddell"}


def test_update_with_no_fields_reports_no_changes(client, alice):
    h = _bearer(alice["token"])
    uid = alice["user"]["id"]

    r = client.put(f"/api/users/{uid}", json={}, headers=h)
    assert r.status_code == 400
    assert r.json() == {"error": "No changes were made"}
    assert client.get(f"/api/users/{uid}", headers=h).json() == alice["user"]


def test_update_conflict_and_missing(client, alice):
    h = _bearer(alice["token"])
    r = client.post("/api/auth/register", json={"username": "bob", "email": "b@y.com", "password": "pw"})
    bob_id = r.json()["user"]["id"]

    r = client.put(f"/api/users/{bob_id}", json={"username": "alice"}, headers=h)
    assert r.status_code == 409

    r = client.put("/api/users/9999", json={"username": "zed"}, headers=h)
    assert r.status_code == 404


def test_password_update_takes_effect_on_login(client, alice):
    h = _bearer(alice["token"])
    uid = alice["user"]["id"]
    assert client.put(f"/api/users/{uid}", json={"password": "newpass"}, headers=h).status_code == 200

    assert client.post("/api/auth/login", json={"username": "alice", "password": "secret1"}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "alice", "password": "newpass"}).status_code == 200
