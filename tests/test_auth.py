from datetime import timedelta
from unittest.mock import patch

import bcrypt

from app.core.security import create_access_token, hash_password, verify_password


def test_register_login_and_me(client):
    r = client.post(
        "/auth/register",
        json={"email": "new.instructor@example.com", "password": "s3cret-pass", "full_name": "New Instructor"},
    )
    assert r.status_code == 201, r.text
    assert "hashed_password" not in r.json()

    r = client.post("/auth/login", json={"email": "new.instructor@example.com", "password": "s3cret-pass"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert r.json()["token_type"] == "bearer"

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["email"] == "new.instructor@example.com"
    assert r.json()["full_name"] == "New Instructor"


def test_register_duplicate_email(client):
    r = client.post("/auth/register", json={"email": "instructor1@example.com", "password": "password123"})
    assert r.status_code == 400


def test_login_with_wrong_password(client):
    r = client.post("/auth/login", json={"email": "instructor1@example.com", "password": "wrong-password"})
    assert r.status_code == 401

    r = client.post("/auth/login", json={"email": "nobody@example.com", "password": "password123"})
    assert r.status_code == 401


def test_expired_token_is_rejected(client):
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-1))
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_password_hashing_uses_bcrypt():
    hashed = hash_password("password123")
    assert hashed.startswith("$2b$")
    assert bcrypt.checkpw(b"password123", hashed.encode())
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)
    assert not verify_password("password123", "garbage")


@patch("app.core.security.bcrypt")
def test_hash_password_delegates_to_bcrypt(mock_bcrypt):
    mock_bcrypt.gensalt.return_value = b"salt"
    mock_bcrypt.hashpw.return_value = b"hashed"

    assert hash_password("password123") == "hashed"
    mock_bcrypt.hashpw.assert_called_once_with(b"password123", b"salt")


@patch("app.core.security.bcrypt")
def test_verify_password_delegates_to_bcrypt(mock_bcrypt):
    mock_bcrypt.checkpw.return_value = True

    assert verify_password("password123", "hashed")
    mock_bcrypt.checkpw.assert_called_once_with(b"password123", b"hashed")

