from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from account_api.core.config import Settings
from account_api.core.security import CredentialService
from account_api.main import create_app
from account_api.models import user as _user_models  # noqa: F401

TEST_SECRET = "test-secret-key"


class FrozenClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        STATIC_DIR=None,
    )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def credentials(settings, clock) -> CredentialService:
    return CredentialService.from_settings(settings, clock=clock)


@pytest.fixture()
def app(settings, engine):
    app = create_app(settings)
    # Share one in-memory database between the app and the `session` fixture.
    app.state.engine = engine
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
