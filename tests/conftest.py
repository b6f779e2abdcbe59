# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("TOKEN_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mingle.core import security
from mingle.db.session import Base
from mingle.db.session import get_db as app_get_session
from mingle.db.time import utcnow
from mingle.main import app as fastapi_app
from mingle.models import Post, User
from mingle.repositories.post_repo import PostRepository

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "Test123!"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Session commits release a savepoint; the outer transaction is rolled back below.
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


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


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once per session."""
    return security.hash_password(TEST_PASSWORD)


def _make_user(db_session: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session, password_hash: str) -> User:
    """Create and return the primary test user (Mary)."""
    return _make_user(db_session, "Mary", "mary@example.com", password_hash)


@pytest.fixture()
def other_user(db_session: Session, password_hash: str) -> User:
    """Create and return a second user (Olga)."""
    return _make_user(db_session, "Olga", "olga@example.com", password_hash)


@pytest.fixture()
def third_user(db_session: Session, password_hash: str) -> User:
    return _make_user(db_session, "Nick", "nick@example.com", password_hash)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return auth headers for the primary test user."""
    return {"auth-token": security.issue_token(test_user.id)}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return auth headers for the secondary test user."""
    return {"auth-token": security.issue_token(other_user.id)}


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    return {"auth-token": security.issue_token(third_user.id)}


@pytest.fixture()
def post_repo(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


@pytest.fixture()
def make_post(post_repo: PostRepository, test_user: User) -> Callable[..., Post]:
    """Return a factory creating posts authored by ``test_user`` unless told otherwise."""

    def _make_post(
        *,
        title: str = "Mary Tech Post",
        topics: tuple[str, ...] = ("Tech",),
        content: str = "Test content",
        expiration_hours: float = 24,
        author: User | None = None,
        created_at: datetime | None = None,
    ) -> Post:
        return post_repo.create(
            author_id=(author or test_user).id,
            title=title,
            topics=topics,
            content=content,
            expiration_hours=expiration_hours,
            now=created_at,
        )

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """A live post by the primary test user."""
    return make_post()


@pytest.fixture()
def expired_post(make_post: Callable[..., Post]) -> Post:
    """A post by the primary test user that expired an hour ago."""
    return make_post(
        title="Old news",
        topics=("Health",),
        expiration_hours=1,
        created_at=utcnow() - timedelta(hours=2),
    )
