"""Tests for the internal catalog source and its repository queries."""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlmodel import Session

from app.schemas.product import IngredientQuery, SearchConstraints
from app.services.search.pipeline import RankingPipeline
from app.services.search.sources.local import LOCAL_STORE, LocalCatalogSource
from app.storage.models import Product
from app.storage.repositories import add_product, get_or_create_store, get_product_by_id, search_products
from app.storage.seed import PRODUCTS, seed_catalog

WEEK_MS = 7 * 24 * 60 * 60 * 1000


def _product(store, name, price=None, brand=None, age=timedelta(0)):
    return Product(
        name=name,
        brand=brand,
        price=price,
        store_id=store.id,
        product_url=f"https://{store.domain}/{name.replace(' ', '-').lower()}",
        last_updated=datetime.now(timezone.utc) - age,
    )


def _source(engine):
    return LocalCatalogSource(session_factory=lambda: Session(engine), freshness_window_ms=WEEK_MS)


def _query(source, canonical, synonyms=frozenset(), **constraints):
    return asyncio.run(source.query(canonical, frozenset(synonyms), SearchConstraints(**constraints)))


def test_get_or_create_store_is_idempotent(session):
    first = get_or_create_store(session, name="Walmart", domain="walmart.com")
    second = get_or_create_store(session, name="Walmart", domain="walmart.com")
    assert first.id == second.id


def test_local_source_matches_synonyms(engine, session):
    store = get_or_create_store(session, name="Walmart", domain="walmart.com")
    add_product(session, _product(store, "Fresh Aubergine", price=2.50))
    add_product(session, _product(store, "Milk Chocolate Bar", price=1.00))

    assert _query(_source(engine), "eggplant") == []
    found = _query(_source(engine), "eggplant", {"aubergine", "brinjal"})
    assert [c.name for c in found] == ["Fresh Aubergine"]
    assert found[0].store.name == "Walmart"
    assert found[0].price == 2.50
    assert found[0].last_updated.tzinfo is not None


def test_local_source_pushes_down_price_brand_and_freshness(engine, session):
    store = get_or_create_store(session, name="Target", domain="target.com")
    add_product(session, _product(store, "Bread Flour", price=2.99, brand="Gold Medal"))
    add_product(session, _product(store, "All-Purpose Flour", price=4.99, brand="King Arthur"))
    add_product(session, _product(store, "Cake Flour", price=None, brand="Swans Down"))
    add_product(session, _product(store, "Rye Flour", price=1.99, age=timedelta(days=10)))
    source = _source(engine)

    assert {c.name for c in _query(source, "flour")} == {"Bread Flour", "All-Purpose Flour", "Cake Flour"}
    assert [c.name for c in _query(source, "flour", max_price=3.0)] == ["Bread Flour"]
    assert [c.name for c in _query(source, "flour", min_price=4.99)] == ["All-Purpose Flour"]
    assert [c.name for c in _query(source, "flour", preferred_brands=["KING ARTHUR"])] == ["All-Purpose Flour"]


def test_search_products_respects_limit(session):
    store = get_or_create_store(session, name="Target", domain="target.com")
    for i in range(5):
        add_product(session, _product(store, f"Flour {i}", price=1.0))
    since = datetime.now(timezone.utc) - timedelta(days=1)
    assert len(search_products(session, ["flour"], fresh_since=since, limit=3)) == 3
    assert search_products(session, [], fresh_since=since) == []


def test_get_product_by_id(session):
    store = get_or_create_store(session, name="Target", domain="target.com")
    product = add_product(session, _product(store, "Whole Milk", price=3.29))
    row = get_product_by_id(session, product.id)
    assert row is not None
    assert row[0].name == "Whole Milk"
    assert row[1].domain == "target.com"
    assert get_product_by_id(session, "missing") is None


def test_eggplant_end_to_end(engine, session):
    store = get_or_create_store(session, name="Walmart", domain="walmart.com")
    add_product(session, _product(store, "Fresh Aubergine", price=2.50))
    add_product(session, _product(store, "Eggplant Dip", price=5.00))
    add_product(session, _product(store, "Milk Chocolate Bar", price=1.00))

    pipeline = RankingPipeline([_source(engine)])
    outcome = asyncio.run(pipeline.search(IngredientQuery(name="eggplant", quantity=1)))

    names = [c.name for c in outcome.results]
    assert names[0] == "Fresh Aubergine"
    assert "Milk Chocolate Bar" not in names
    assert outcome.results[0].match_score == 0.8
    assert outcome.degraded_sources == []


def test_seed_catalog_is_repeatable(session):
    assert seed_catalog(session) == len(PRODUCTS)
    assert seed_catalog(session) == 0


def test_local_store_identity():
    assert LOCAL_STORE.id == "local"
