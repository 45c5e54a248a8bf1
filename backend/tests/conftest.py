import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from app import main
from app.api.products import get_pipeline
from app.schemas.product import CandidateProduct, StoreRef
from app.services.search.sources.base import CatalogSource
from app.storage import db as db_module

STORE_A = StoreRef(id="store-a", name="Acme Grocers", domain="acme.example")
STORE_B = StoreRef(id="store-b", name="Zed Market", domain="zed.example")


class FakeSource(CatalogSource):
    """In-memory catalog source; records calls, can sleep or raise."""

    def __init__(self, store, candidates=None, error=None, delay_s=0.0):
        self.store = store
        self.candidates = list(candidates or [])
        self.error = error
        self.delay_s = delay_s
        self.calls = []

    async def query(self, canonical, synonyms, constraints):
        self.calls.append((canonical, synonyms, constraints))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


@pytest.fixture
def make_candidate():
    counter = {"n": 0}

    def _make(name, price=None, store=STORE_A, brand=None, age=timedelta(0), id=None):
        counter["n"] += 1
        return CandidateProduct(
            id=id or f"{store.id}-{counter['n']}",
            name=name,
            brand=brand,
            price=price,
            product_url=f"https://{store.domain}/p/{counter['n']}",
            store=store,
            last_updated=datetime.now(timezone.utc) - age,
        )

    return _make


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(monkeypatch, engine):
    def _get_session_override():
        return Session(engine)

    monkeypatch.setattr(db_module, "engine", engine)
    monkeypatch.setattr(db_module, "get_session", _get_session_override)

    client = TestClient(main.app)
    yield client
    main.app.dependency_overrides.pop(get_pipeline, None)
