# tests/conftest.py
import os

# The settings object is built at import time, so the environment has to be
# in place before anything from ebe is imported.
os.environ.setdefault("ENV", "local")
os.environ.setdefault("DATABASE_URL_LOCAL", "sqlite://")
os.environ.setdefault("REDIS_URL_LOCAL", "redis://localhost:6379/15")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from ebe.main import app
from ebe.api import deps
from ebe.db.base_class import Base
import ebe.models  # noqa: F401

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def redis_mock():
    return MagicMock()


@pytest.fixture(scope="function")
def test_client(db_session, redis_mock):
    """
    TestClient backed by the in-memory database. Redis is mocked; auth is
    real, so requests need headers from tests.utils.auth.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_redis] = lambda: redis_mock

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
