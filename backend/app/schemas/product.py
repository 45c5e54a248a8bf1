from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class StoreRef(BaseModel):
    """Originating catalog/store of a product; display and tie-break only."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    domain: str


class SearchConstraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    preferred_brands: list[str] | None = None
    max_results: int | None = Field(default=None, ge=1)


class IngredientQuery(BaseModel):
    """Structured ingredient reference; quantity/unit are informational only."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: float = Field(ge=0)
    unit: str | None = None
    constraints: SearchConstraints = Field(default_factory=SearchConstraints)


class CandidateProduct(BaseModel):
    id: str
    name: str
    brand: str | None = None
    price: float | None = None
    currency: str = "USD"
    image_url: str | None = None
    product_url: str
    store: StoreRef
    package_size: str | None = None
    unit: str | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ScoredCandidate(CandidateProduct):
    match_score: float = Field(ge=0.0, le=1.0)


class SearchOutcome(BaseModel):
    results: list[ScoredCandidate] = []
    degraded_sources: list[StoreRef] = []


class ProductSearchResponse(BaseModel):
    ingredient_name: str
    canonical_name: str
    quantity: float
    unit: str | None
    products: list[ScoredCandidate]
    total_products: int
    degraded_sources: list[StoreRef] = []
