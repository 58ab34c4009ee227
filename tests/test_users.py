# tests/test_users.py
"""Tests for account endpoints and the account service."""

import pytest
from fastapi import status

from threadline.core.errors import ValidationError, VerificationFailure
from threadline.core.security import CredentialVerifier, hash_password, verify_password
from threadline.services.accounts import AccountService


def test_password_hashing_round_trip() -> None:
    stored = hash_password("correct horse")
    assert stored != "correct horse"
    assert verify_password("correct horse", stored)
    assert not verify_password("wrong horse", stored)


def test_register_login_and_me(client) -> None:
    registered = client.post(
        "/api/v1/users/register",
        json={"username": "carol", "password": "s3cret-pass"},
    )
    assert registered.status_code == status.HTTP_201_CREATED
    user = registered.json()
    assert user["username"] == "carol"
    assert user["is_admin"] is False
    assert "password_hash" not in user

    login = client.post(
        "/api/v1/users/login",
        json={"username": "carol", "password": "s3cret-pass"},
    )
    assert login.status_code == status.HTTP_200_OK
    token = login.json()["access_token"]
    assert login.json()["token_type"] == "bearer"

    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["id"] == user["id"]


def test_register_duplicate_username(client, test_user) -> None:
    response = client.post(
        "/api/v1/users/register",
        json={"username": test_user.username, "password": "another-pass"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_register_short_password(client) -> None:
    response = client.post("/api/v1/users/register", json={"username": "dave", "password": "x"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_login_wrong_password(client) -> None:
    client.post("/api/v1/users/register", json={"username": "erin", "password": "right-pass"})
    response = client.post(
        "/api/v1/users/login",
        json={"username": "erin", "password": "wrong-pass"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"]["kind"] == "unauthorized"


def test_me_requires_valid_token(client) -> None:
    assert client.get("/api/v1/users/me").status_code == status.HTTP_401_UNAUTHORIZED
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer forged"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_account_service(db_session) -> None:
    accounts = AccountService(db_session)
    admin = accounts.register("ops", "admin-pass", is_admin=True)

    assert accounts.authenticate("ops", "admin-pass").id == admin.id
    with pytest.raises(VerificationFailure):
        accounts.authenticate("ghost", "admin-pass")
    with pytest.raises(ValidationError):
        accounts.register("ops", "other-pass")

    claims = CredentialVerifier().verify(accounts.issue_token(admin))
    assert claims.user_id == admin.id
    assert claims.is_admin is True
