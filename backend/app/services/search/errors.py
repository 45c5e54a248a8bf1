from app.schemas.product import StoreRef


class SearchError(Exception):
    """Base class for ranking pipeline errors."""


class InvalidQuery(SearchError):
    """Ingredient name canonicalizes to an empty string."""


class SourceUnavailable(SearchError):
    """One catalog source failed: transport error, bad status or malformed payload."""

    def __init__(self, store: StoreRef, reason: str) -> None:
        super().__init__(f"{store.id}: {reason}")
        self.store = store
        self.reason = reason


class SearchUnavailable(SearchError):
    """Every configured catalog source failed or timed out."""

    def __init__(self, degraded_sources: list[StoreRef]) -> None:
        names = ", ".join(s.id for s in degraded_sources)
        super().__init__(f"all catalog sources unavailable: {names}")
        self.degraded_sources = degraded_sources
