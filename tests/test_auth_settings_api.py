from apps.auth.schemas import UserCreate
from apps.auth.services import create_user
from factories import API

AUTH = f"{API}/auth"


def login(client, email, password):
    return client.post(f"{AUTH}/token", data={"username": email, "password": password})


def test_login_and_profile(anonymous_client, db):
    create_user(db, UserCreate(name="Nurse", email="nurse@example.com", password="secret1"))

    token = login(anonymous_client, "nurse@example.com", "secret1").json()["access_token"]
    response = anonymous_client.get(f"{AUTH}/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["email"] == "nurse@example.com"
    assert response.json()["is_admin"] is False


def test_wrong_password(anonymous_client, db):
    create_user(db, UserCreate(name="Nurse", email="nurse@example.com", password="secret1"))

    assert login(anonymous_client, "nurse@example.com", "nope").status_code == 401


def test_password_change_requires_matching_confirmation(anonymous_client, db):
    create_user(db, UserCreate(name="Nurse", email="nurse@example.com", password="secret1"))
    token = login(anonymous_client, "nurse@example.com", "secret1").json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    mismatch = anonymous_client.post(f"{AUTH}/users/me/password", headers=headers, json={
        "current_password": "secret1", "new_password": "secret2", "confirm_password": "secret3",
    })
    assert mismatch.status_code == 422
    assert mismatch.json()["field"] == "confirm_password"

    changed = anonymous_client.post(f"{AUTH}/users/me/password", headers=headers, json={
        "current_password": "secret1", "new_password": "secret2", "confirm_password": "secret2",
    })
    assert changed.status_code == 200
    assert login(anonymous_client, "nurse@example.com", "secret2").status_code == 200


def test_only_admins_create_users(client):
    created = client.post(f"{AUTH}/users", json={"name": "Tech", "email": "tech@example.com", "password": "secret1"})
    assert created.status_code == 201

    duplicate = client.post(f"{AUTH}/users", json={"name": "Tech", "email": "tech@example.com", "password": "secret1"})
    assert duplicate.status_code == 400


def test_non_admin_is_forbidden(anonymous_client, db):
    create_user(db, UserCreate(name="Nurse", email="nurse@example.com", password="secret1"))
    token = login(anonymous_client, "nurse@example.com", "secret1").json()["access_token"]

    response = anonymous_client.get(f"{API}/settings/connection", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_connection_override_roundtrip(client, tmp_path, monkeypatch):
    monkeypatch.setenv("OVERRIDE_FILE", str(tmp_path / "override.json"))

    saved = client.put(f"{API}/settings/connection", json={"EXPIRY_WARNING_DAYS": 60, "ALLOW_OVERPAYMENT": False})
    assert saved.status_code == 200
    assert saved.json()["restart_required"] is True
    assert saved.json()["override"]["EXPIRY_WARNING_DAYS"] == 60

    current = client.get(f"{API}/settings/connection").json()
    assert current["override"]["ALLOW_OVERPAYMENT"] is False
    assert current["active"]["EXPIRY_WARNING_DAYS"] == 30

    cleared = client.delete(f"{API}/settings/connection").json()
    assert cleared["restart_required"] is True
    assert client.get(f"{API}/settings/connection").json()["override"]["EXPIRY_WARNING_DAYS"] is None


def test_invalid_log_level_rejected(client, tmp_path, monkeypatch):
    monkeypatch.setenv("OVERRIDE_FILE", str(tmp_path / "override.json"))

    assert client.put(f"{API}/settings/connection", json={"LOG_LEVEL": "LOUD"}).status_code == 422
