import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from besu_bridge.core.database import Base
from besu_bridge.main import create_app
from besu_bridge.services.store import SqlValueStore
from fakes import FakeChain, FakeStore

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture()
def engine():
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def store(engine):
    return SqlValueStore(engine)


@pytest.fixture()
def chain():
    return FakeChain(value=0)


@pytest.fixture()
def fake_store():
    return FakeStore(value="0")


@pytest.fixture()
def client(chain, store):
    app = create_app(chain=chain, store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def fake_client(chain, fake_store):
    """Client over a store whose failures can be injected."""
    app = create_app(chain=chain, store=fake_store)
    with TestClient(app) as c:
        yield c
