# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

os.environ.setdefault("SECRET_KEY", "threadline-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from threadline.core.security import create_access_token
from threadline.db.session import Database, get_db as app_get_session
from threadline.main import app as fastapi_app
from threadline.models import Post, User
from threadline.services.identity import AnonymousActor, RegisteredActor

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def database() -> Iterator[Database]:
    database = Database(TEST_DB_URL)
    database.create_tables()
    try:
        yield database
    finally:
        database.close()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users without paying for password hashing."""

    def _make_user(username: str, *, is_admin: bool = False) -> User:
        user = User(username=username, password_hash="unused", is_admin=is_admin)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary registered user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second registered user."""
    return make_user("bob")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    """Create and return an administrator."""
    return make_user("root", is_admin=True)


def bearer(user: User) -> dict[str, str]:
    token = create_access_token(user.id, username=user.username, is_admin=user.is_admin)
    return {"Authorization": f"Bearer {token}"}


def as_actor(user: User) -> RegisteredActor:
    return RegisteredActor(id=user.id, is_admin=user.is_admin, username=user.username)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    return bearer(admin_user)


@pytest.fixture()
def user_post(db_session: Session, test_user: User) -> Post:
    """A post owned by the primary registered user."""
    post = Post(
        title="Registered post",
        content="Written while logged in",
        category="general",
        author_user_id=test_user.id,
        vote_score=0,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def anon_post(db_session: Session) -> Post:
    """A post owned by an anonymous participant holding token ``anon-secret``."""
    post = Post(
        title="Anonymous post",
        content="Written without an account",
        category="general",
        anonymous_id="anon-1",
        deletion_token="anon-secret",
        vote_score=0,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def anonymous() -> AnonymousActor:
    return AnonymousActor(id="anon-1")
