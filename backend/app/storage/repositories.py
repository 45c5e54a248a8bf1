from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from app.logging import get_logger
from app.storage.models import Product, Store

logger = get_logger(__name__)


def get_or_create_store(
    session: Session, name: str, domain: str, country: str = "US", currency: str = "USD"
) -> Store:
    store = session.exec(select(Store).where(Store.domain == domain)).first()
    if store:
        return store
    store = Store(name=name, domain=domain, country=country, currency=currency)
    session.add(store)
    session.commit()
    session.refresh(store)
    logger.info("store.created id=%s name=%s domain=%s", store.id, store.name, store.domain)
    return store


def add_product(session: Session, product: Product) -> Product:
    session.add(product)
    session.commit()
    session.refresh(product)
    logger.info(
        "product.created id=%s name=%s price=%s store_id=%s",
        product.id,
        product.name,
        product.price,
        product.store_id,
    )
    return product


def get_product_by_id(session: Session, product_id: str) -> Optional[tuple[Product, Store]]:
    return session.exec(
        select(Product, Store).join(Store, Product.store_id == Store.id).where(Product.id == product_id)
    ).first()


def search_products(
    session: Session,
    terms: Iterable[str],
    fresh_since: datetime,
    min_price: float | None = None,
    max_price: float | None = None,
    brands: Iterable[str] | None = None,
    limit: int = 20,
) -> list[tuple[Product, Store]]:
    """
    Products whose name contains any of the terms (case-insensitive), joined with their store.
    Price bounds are inclusive and drop rows without a price; brands match case-insensitively.
    """
    terms = [t for t in terms if t]
    patterns = [col(Product.name).ilike(f"%{term}%") for term in terms]
    if not patterns:
        return []
    stmt = (
        select(Product, Store)
        .join(Store, Product.store_id == Store.id)
        .where(or_(*patterns))
        .where(Product.last_updated >= fresh_since.replace(tzinfo=None))
    )
    if min_price is not None:
        stmt = stmt.where(Product.price >= min_price)
    if max_price is not None:
        stmt = stmt.where(Product.price <= max_price)
    wanted_brands = [b.lower() for b in (brands or []) if b]
    if wanted_brands:
        stmt = stmt.where(func.lower(Product.brand).in_(wanted_brands))
    rows = list(session.exec(stmt.order_by(Product.name, Product.id).limit(limit)))
    logger.info("catalog.search terms=%s rows=%s", terms, len(rows))
    return rows
