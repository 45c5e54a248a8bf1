"""
Catalog source contract.

A source turns (canonical name, synonyms, constraints) into raw candidate
products. It either returns zero or more candidates or raises
SourceUnavailable; the pipeline bounds every call with its own timeout and
treats any failure as affecting that source only.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.schemas.product import CandidateProduct, SearchConstraints, StoreRef
from app.services.search.errors import SourceUnavailable


def text_field(value: Any) -> str | None:
    """Remote string field as text: numbers become strings, blanks and other types None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class CatalogSource(ABC):
    #: identity reported in degraded_sources when this source fails
    store: StoreRef

    @abstractmethod
    async def query(
        self,
        canonical: str,
        synonyms: frozenset[str],
        constraints: SearchConstraints,
    ) -> list[CandidateProduct]:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.store.id})"


class HttpCatalogSource(CatalogSource):
    """Shared plumbing for third-party sources reached over HTTP with httpx."""

    def __init__(self, timeout_s: float, client: httpx.AsyncClient | None = None) -> None:
        self._timeout_s = timeout_s
        self._client = client

    async def _get_json(self, url: str, params: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        """GET url and decode JSON; any transport, status or decode problem is SourceUnavailable."""
        try:
            if self._client is not None:
                resp = await self._client.get(url, params=params, headers=headers, timeout=self._timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                    resp = await client.get(url, params=params, headers=headers)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as exc:
            raise SourceUnavailable(self.store, f"http error: {exc}") from exc
        except ValueError as exc:
            raise SourceUnavailable(self.store, "response body is not JSON") from exc
