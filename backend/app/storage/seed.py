"""
Seed the internal catalog with a few stores and products for local development.
Run with: python -m app.storage.seed
"""

from sqlmodel import Session, select

from app.logging import configure_logging, get_logger
from app.storage.db import create_db_and_tables, get_session
from app.storage.models import Product
from app.storage.repositories import add_product, get_or_create_store

logger = get_logger(__name__)

STORES = [
    {"name": "Walmart", "domain": "walmart.com", "country": "US", "currency": "USD"},
    {"name": "Target", "domain": "target.com", "country": "US", "currency": "USD"},
    {"name": "Carrefour", "domain": "carrefour.fr", "country": "FR", "currency": "EUR"},
]

# (store domain, name, brand, price, package size, unit)
PRODUCTS = [
    ("walmart.com", "Great Value All-Purpose Flour", "Great Value", 2.98, "5 lb", "bag"),
    ("walmart.com", "Fresh Aubergine", None, 2.50, "1 ct", "piece"),
    ("walmart.com", "Domino Granulated Sugar", "Domino", 3.64, "4 lb", "bag"),
    ("target.com", "King Arthur All-Purpose Flour", "King Arthur", 4.99, "5 lb", "bag"),
    ("target.com", "Good & Gather Whole Milk", "Good & Gather", 3.29, "1 gal", "bottle"),
    ("carrefour.fr", "Courgette Bio", "Carrefour Bio", 1.89, "500g", "kg"),
]


def seed_catalog(session: Session) -> int:
    """Insert the sample stores and any sample products not already present. Returns products added."""
    stores = {s["domain"]: get_or_create_store(session, **s) for s in STORES}
    added = 0
    for domain, name, brand, price, size, unit in PRODUCTS:
        store = stores[domain]
        exists = session.exec(
            select(Product).where(Product.store_id == store.id, Product.name == name)
        ).first()
        if exists:
            continue
        add_product(
            session,
            Product(
                name=name,
                brand=brand,
                price=price,
                currency=store.currency,
                unit=unit,
                package_size=size,
                store_id=store.id,
                product_url=f"https://{domain}/search?q={name.replace(' ', '+')}",
            ),
        )
        added += 1
    logger.info("seed.done stores=%s products_added=%s", len(stores), added)
    return added


if __name__ == "__main__":
    configure_logging()
    create_db_and_tables()
    with get_session() as session:
        seed_catalog(session)
