import pytest
from fastapi.testclient import TestClient

from oauth_identity_api.app.core.config import settings
from oauth_identity_api.app.main import app


@pytest.fixture()
def client():
    with TestClient(app) as client:
        yield client


def _create_user(client, username="alice", password="pw123", **fields):
    return client.post("/api/v1/users/", json={"username": username, "password": password, **fields})


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

def test_create_user_returns_201_without_password(client):
    response = _create_user(client, email="alice@example.com")

    body = response.json()
    assert response.status_code == 201
    assert body["id"] == 1
    assert body["username"] == "alice"
    assert "password" not in body


def test_create_duplicate_user_returns_409(client):
    _create_user(client)

    response = _create_user(client, password="other")

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_update_user_password_returns_200(client, db_rows):
    created = _create_user(client).json()
    before = db_rows("SELECT password FROM users WHERE id = ?", (created["id"],))[0]["password"]

    response = client.post(
        "/api/v1/users/",
        json={"id": created["id"], "username": "renamed", "password": "new-pw"},
    )

    after = db_rows("SELECT username, password FROM users WHERE id = ?", (created["id"],))[0]
    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert after["username"] == "alice"
    assert after["password"] != before


def test_update_unknown_user_returns_404(client):
    response = client.post("/api/v1/users/", json={"id": 77, "username": "x", "password": "y"})

    assert response.status_code == 404


def test_user_ids_beyond_storage_range_return_404(client):
    too_big = 2 ** 63

    assert client.get(f"/api/v1/users/{too_big}").status_code == 404
    assert client.delete(f"/api/v1/users/{too_big}").status_code == 404
    assert client.post("/api/v1/users/", json={"id": too_big, "username": "x", "password": "y"}).status_code == 404


def test_create_user_requires_username_and_password(client):
    response = client.post("/api/v1/users/", json={"username": "alice"})

    assert response.status_code == 422


def test_get_user_by_id_and_username(client):
    created = _create_user(client).json()

    by_id = client.get(f"/api/v1/users/{created['id']}")
    by_name = client.get("/api/v1/users/by-username/alice")
    missing = client.get("/api/v1/users/by-username/bob")

    assert by_id.status_code == 200
    assert by_name.json() == by_id.json()
    assert missing.status_code == 404


def test_list_users_with_filters_and_paging(client):
    for name in ("alice", "bob", "carol"):
        _create_user(client, username=name, enabled=name != "bob")

    page = client.get("/api/v1/users/", params={"size": 2}).json()
    disabled = client.get("/api/v1/users/", params={"enabled": "false"}).json()

    assert page["total"] == 3
    assert page["pages"] == 2
    assert [user["username"] for user in page["items"]] == ["alice", "bob"]
    assert [user["username"] for user in disabled["items"]] == ["bob"]


def test_delete_user(client):
    created = _create_user(client).json()

    first = client.delete(f"/api/v1/users/{created['id']}")
    second = client.delete(f"/api/v1/users/{created['id']}")

    assert first.status_code == 204
    assert second.status_code == 404


# ---------------------------------------------------------------------------
# Authorities and scopes
# ---------------------------------------------------------------------------

def test_authority_crud(client):
    created = client.post("/api/v1/authorities/", json={"name": "ROLE_OPS", "description": "Ops"})
    authority_id = created.json()["id"]

    modified = client.put(f"/api/v1/authorities/{authority_id}", json={"id": 999, "name": "ROLE_SRE"})
    fetched = client.get(f"/api/v1/authorities/{authority_id}")
    deleted = client.delete(f"/api/v1/authorities/{authority_id}")
    deleted_again = client.delete(f"/api/v1/authorities/{authority_id}")
    missing = client.get(f"/api/v1/authorities/{authority_id}")

    assert created.status_code == 201
    assert modified.json() == {"id": authority_id, "name": "ROLE_SRE", "description": None}
    assert fetched.json()["name"] == "ROLE_SRE"
    assert deleted.status_code == 204
    assert deleted_again.status_code == 204
    assert missing.status_code == 404


def test_authorities_batch_lookup(client):
    response = client.get("/api/v1/authorities/batch", params=[("ids", 1), ("ids", 2), ("ids", 40)])

    assert response.status_code == 200
    assert [authority["name"] for authority in response.json()] == ["ROLE_ADMIN", "ROLE_USER"]


def test_authority_ids_beyond_storage_range(client):
    too_big = 2 ** 63

    assert client.get(f"/api/v1/authorities/{too_big}").status_code == 404
    assert client.put(f"/api/v1/authorities/{too_big}", json={"name": "ROLE_BIG"}).status_code == 404
    assert client.post("/api/v1/scopes/", json={"id": too_big, "name": "big"}).status_code == 404
    assert client.delete(f"/api/v1/authorities/{too_big}").status_code == 204
    assert client.get("/api/v1/authorities/batch", params=[("ids", 1), ("ids", too_big)]).json()[0]["id"] == 1


def test_list_authorities(client):
    body = client.get("/api/v1/authorities/").json()

    assert body["total"] == 2
    assert body["page"] == 0


def test_scope_endpoints(client):
    created = client.post("/api/v1/scopes/", json={"name": "profile"}).json()

    listed = client.get("/api/v1/scopes/", params={"sort": "name"}).json()
    batch = client.get("/api/v1/scopes/batch", params=[("ids", created["id"])]).json()

    assert [scope["name"] for scope in listed["items"]] == ["profile", "read", "write"]
    assert batch == [created]


# ---------------------------------------------------------------------------
# Admin token
# ---------------------------------------------------------------------------

def test_admin_token_is_enforced(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_token", "s3cret")

    missing = client.get("/api/v1/users/")
    wrong = client.get("/api/v1/users/", headers={"Authorization": "Bearer nope"})
    right = client.get("/api/v1/users/", headers={"Authorization": "Bearer s3cret"})

    assert missing.status_code == 401
    assert wrong.status_code == 403
    assert right.status_code == 200


def test_authority_and_scope_routes_are_documented(client):
    paths = client.get("/openapi.json").json()["paths"]

    for path, operations in paths.items():
        if path.startswith(("/api/v1/authorities", "/api/v1/scopes")):
            for operation in operations.values():
                assert operation.get("description"), f"{path} has no description"
