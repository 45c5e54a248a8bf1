import asyncio
from typing import Callable

from sqlmodel import Session

from app.logging import get_logger
from app.schemas.product import CandidateProduct, SearchConstraints, StoreRef
from app.services.search.freshness import as_utc, fresh_since
from app.services.search.sources.base import CatalogSource
from app.storage.models import Product, Store
from app.storage.repositories import search_products

logger = get_logger(__name__)

LOCAL_STORE = StoreRef(id="local", name="Local Catalog", domain="local")


def product_to_candidate(product: Product, store: Store) -> CandidateProduct:
    return CandidateProduct(
        id=product.id,
        name=product.name,
        brand=product.brand,
        price=product.price,
        currency=product.currency,
        image_url=product.image_url,
        product_url=product.product_url,
        store=StoreRef(id=store.id, name=store.name, domain=store.domain),
        package_size=product.package_size,
        unit=product.unit,
        last_updated=as_utc(product.last_updated),
    )


class LocalCatalogSource(CatalogSource):
    """
    Internal catalog backed by the product tables.
    Matches the canonical name or any synonym as a substring of the stored
    name and pushes price range, preferred brands and the freshness window
    down into the query.
    """

    store = LOCAL_STORE

    def __init__(
        self,
        session_factory: Callable[[], Session],
        freshness_window_ms: int,
        row_limit: int = 20,
    ) -> None:
        self._session_factory = session_factory
        self._freshness_window_ms = freshness_window_ms
        self._row_limit = row_limit

    async def query(
        self,
        canonical: str,
        synonyms: frozenset[str],
        constraints: SearchConstraints,
    ) -> list[CandidateProduct]:
        terms = [canonical, *sorted(synonyms)]
        # Session work is blocking; keep it off the event loop
        return await asyncio.to_thread(self._query_sync, terms, constraints)

    def _query_sync(self, terms: list[str], constraints: SearchConstraints) -> list[CandidateProduct]:
        with self._session_factory() as session:
            rows = search_products(
                session,
                terms=terms,
                fresh_since=fresh_since(self._freshness_window_ms),
                min_price=constraints.min_price,
                max_price=constraints.max_price,
                brands=constraints.preferred_brands,
                limit=self._row_limit,
            )
            candidates = [product_to_candidate(product, store) for product, store in rows]
        logger.info("source.local.done terms=%s count=%s", terms, len(candidates))
        return candidates
