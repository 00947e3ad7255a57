from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from beepboop.api.deps import get_completion_client_dep, get_db
from beepboop.core.db import build_engine
from beepboop.main import app
from beepboop.tests.utils.completion import replying_client


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def completion_client():
    """Completion client used by the API; tests may replace it through this fixture"""
    return replying_client("Hello from the model")


@pytest.fixture
def client(db: Session, completion_client) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_completion_client_dep] = lambda: completion_client
    yield TestClient(app)
    app.dependency_overrides.clear()
