import uuid
from datetime import datetime, timezone
from urllib.parse import quote_plus

import httpx

from app.logging import get_logger
from app.schemas.product import CandidateProduct, SearchConstraints, StoreRef
from app.services.search.errors import SourceUnavailable
from app.services.search.sources.base import HttpCatalogSource, text_field

logger = get_logger(__name__)

INSTACART_STORE = StoreRef(id="instacart", name="Instacart", domain="www.instacart.com")


def parse_price(price: object) -> float | None:
    """'$2.50' -> 2.5; numbers pass through; anything unparseable is None."""
    if price is None or isinstance(price, bool):
        return None
    if isinstance(price, (int, float)):
        return float(price)
    try:
        s = str(price).replace("$", "").replace(",", "").strip()
        return float(s) if s else None
    except ValueError:
        return None


def _retailer_store(slug: str) -> StoreRef:
    name = slug.replace("-", " ").title()
    return StoreRef(id=f"instacart:{slug}", name=name, domain=f"www.instacart.com/store/{slug}")


class InstacartSource(HttpCatalogSource):
    """Instacart product search through the parse.bot scraper API."""

    store = INSTACART_STORE

    def __init__(
        self,
        base_url: str,
        api_key: str,
        postal_code: str,
        retailer_slug: str,
        timeout_s: float,
        limit: int = 5,
        default_currency: str = "USD",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(timeout_s=timeout_s, client=client)
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._postal_code = postal_code
        self._retailer_slug = retailer_slug
        self._limit = limit
        self._default_currency = default_currency

    def _headers(self) -> dict:
        return {"X-API-Key": self._api_key}

    async def query(
        self,
        canonical: str,
        synonyms: frozenset[str],
        constraints: SearchConstraints,
    ) -> list[CandidateProduct]:
        logger.info(
            "source.instacart.search query=%s postal=%s retailer=%s limit=%s",
            canonical,
            self._postal_code,
            self._retailer_slug,
            self._limit,
        )
        payload = await self._get_json(
            f"{self._base_url}/search_products",
            params={
                "query": canonical,
                "postal_code": self._postal_code,
                "retailer_slug": self._retailer_slug,
                "limit": self._limit,
            },
            headers=self._headers(),
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        products = data.get("products") if isinstance(data, dict) else None
        if not isinstance(products, list):
            status = payload.get("status") if isinstance(payload, dict) else None
            raise SourceUnavailable(self.store, f"unexpected payload status={status}")

        retailer = text_field(data.get("retailer")) or self._retailer_slug
        fetched_at = datetime.now(timezone.utc)
        candidates = []
        for product in products:
            if not isinstance(product, dict):
                continue
            name = text_field(product.get("name"))
            if not name:
                logger.warning("source.instacart.skip_record id=%s reason=no_name", product.get("id"))
                continue
            slug = text_field(product.get("retailer_slug")) or retailer
            candidates.append(
                CandidateProduct(
                    id=text_field(product.get("id")) or f"instacart_{uuid.uuid4().hex}",
                    name=name,
                    brand=text_field(product.get("brand")),
                    price=parse_price(product.get("price")),
                    currency=self._default_currency,
                    image_url=text_field(product.get("image_url")) or text_field(product.get("image")),
                    product_url=text_field(product.get("url"))
                    or f"https://www.instacart.com/store/{slug}/s?k={quote_plus(name)}",
                    store=_retailer_store(slug),
                    package_size=text_field(product.get("size")),
                    last_updated=fetched_at,
                )
            )
        logger.info("source.instacart.done query=%s retailer=%s count=%s", canonical, retailer, len(candidates))
        return candidates
