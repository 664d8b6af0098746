"""
Pytest fixtures for Flask-based testing.
Database-backed tests get a fresh schema per test: SQLite in-memory by default,
or TEST_DATABASE_URL (e.g. a Postgres URL) when it is set.
"""
import os
from collections.abc import Generator

import pytest
from sqlalchemy.pool import StaticPool

from resume_builder.core.config import Settings
from resume_builder.core.database import Database
from resume_builder.core.security import create_access_token, hash_password
from resume_builder.domain.user import User
from resume_builder.main import create_app
from resume_builder.repositories.resume_repository import ResumeRepository
from resume_builder.repositories.user_repository import UserRepository

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture
def settings() -> Settings:
    test_settings = Settings()
    test_settings.DATABASE_URL = TEST_DATABASE_URL
    test_settings.JWT_SECRET = "test-secret"
    test_settings.JWT_EXPIRATION_MINUTES = 5
    test_settings.LOG_LEVEL = "WARNING"
    test_settings.DEBUG = False
    return test_settings


@pytest.fixture
def database(settings) -> Generator[Database, None, None]:
    if settings.DATABASE_URL.startswith("sqlite"):
        db = Database(settings.DATABASE_URL, poolclass=StaticPool, connect_args={"check_same_thread": False})
    else:
        db = Database(settings.DATABASE_URL)
    db.drop_all()
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def user_repository(database) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def resume_repository(database) -> ResumeRepository:
    return ResumeRepository(database)


def _make_user(repository: UserRepository, email: str) -> User:
    return repository.save(User.create_local_user(email, hash_password("secret123"), "Test", "User"))


@pytest.fixture
def user(user_repository) -> User:
    return _make_user(user_repository, "owner@example.com")


@pytest.fixture
def other_user(user_repository) -> User:
    return _make_user(user_repository, "someone-else@example.com")


def _auth_headers(user: User, settings: Settings) -> dict:
    token = create_access_token({"userId": user.id, "email": user.email, "role": user.role.value}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user, settings) -> dict:
    return _auth_headers(user, settings)


@pytest.fixture
def other_auth_headers(other_user, settings) -> dict:
    return _auth_headers(other_user, settings)


@pytest.fixture
def app(settings, database):
    flask_app = create_app(settings, database)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c
