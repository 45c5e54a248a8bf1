"""Open Food Facts product search. Open data: names, brands, images; never prices."""

import uuid
from datetime import datetime, timezone
from typing import Any

import httpx

from app.logging import get_logger
from app.schemas.product import CandidateProduct, SearchConstraints, StoreRef
from app.services.search.errors import SourceUnavailable
from app.services.search.sources.base import HttpCatalogSource, text_field

logger = get_logger(__name__)

OPENFOODFACTS_STORE = StoreRef(
    id="openfoodfacts",
    name="Open Food Facts",
    domain="world.openfoodfacts.org",
)
PRODUCT_URL = "https://world.openfoodfacts.org/product/{code}"


def _first_brand(brands: Any) -> str | None:
    """'Ferrero, Nutella' -> 'Ferrero'."""
    if not isinstance(brands, str):
        return None
    first = brands.split(",")[0].strip()
    return first or None


class OpenFoodFactsSource(HttpCatalogSource):
    store = OPENFOODFACTS_STORE

    def __init__(
        self,
        base_url: str,
        timeout_s: float,
        page_size: int = 10,
        default_currency: str = "USD",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(timeout_s=timeout_s, client=client)
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._default_currency = default_currency

    async def query(
        self,
        canonical: str,
        synonyms: frozenset[str],
        constraints: SearchConstraints,
    ) -> list[CandidateProduct]:
        logger.info("source.openfoodfacts.search query=%s page_size=%s", canonical, self._page_size)
        payload = await self._get_json(
            f"{self._base_url}/search.pl",
            params={
                "search_terms": canonical,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": self._page_size,
            },
        )
        products = payload.get("products") if isinstance(payload, dict) else None
        if not isinstance(products, list):
            raise SourceUnavailable(self.store, "payload has no products list")

        fetched_at = datetime.now(timezone.utc)
        candidates = []
        for product in products:
            if not isinstance(product, dict):
                continue
            candidates.append(self._to_candidate(product, canonical, fetched_at))
        logger.info("source.openfoodfacts.done query=%s count=%s", canonical, len(candidates))
        return candidates

    def _to_candidate(self, product: dict, canonical: str, fetched_at: datetime) -> CandidateProduct:
        code = text_field(product.get("code")) or ""
        return CandidateProduct(
            id=code or f"openfoodfacts_{uuid.uuid4().hex}",
            name=text_field(product.get("product_name")) or text_field(product.get("generic_name")) or canonical,
            brand=_first_brand(product.get("brands")),
            price=None,
            currency=self._default_currency,
            image_url=text_field(product.get("image_front_url")),
            product_url=PRODUCT_URL.format(code=code) if code else f"https://{self.store.domain}",
            store=self.store,
            package_size=text_field(product.get("quantity")),
            last_updated=fetched_at,
        )
