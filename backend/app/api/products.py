"""Product search over the ranking pipeline, plus single-product lookup in the local catalog."""

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from app.logging import get_logger
from app.schemas.product import IngredientQuery, ProductSearchResponse, ScoredCandidate
from app.services.search.canonicalize import canonicalize
from app.services.search.errors import InvalidQuery, SearchUnavailable
from app.services.search.factory import build_pipeline
from app.services.search.pipeline import RankingPipeline
from app.services.search.sources.local import product_to_candidate
from app.storage import db
from app.storage.repositories import get_product_by_id

router = APIRouter()
logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_pipeline() -> RankingPipeline:
    return build_pipeline()


@router.post("/products/search", response_model=ProductSearchResponse)
async def search_products(
    query: IngredientQuery,
    pipeline: RankingPipeline = Depends(get_pipeline),
) -> ProductSearchResponse:
    try:
        outcome = await pipeline.search(query)
    except InvalidQuery as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchUnavailable as e:
        logger.error("products.search.unavailable name=%s error=%s", query.name, e)
        raise HTTPException(status_code=503, detail="Product search is temporarily unavailable. Try again later.")

    return ProductSearchResponse(
        ingredient_name=query.name,
        canonical_name=canonicalize(query.name),
        quantity=query.quantity,
        unit=query.unit,
        products=outcome.results,
        total_products=len(outcome.results),
        degraded_sources=outcome.degraded_sources,
    )


@router.get("/products/{product_id}", response_model=ScoredCandidate)
def get_product(product_id: str) -> ScoredCandidate:
    with db.get_session() as session:
        row = get_product_by_id(session, product_id)
        if row is None:
            raise HTTPException(status_code=404, detail="Product not found")
        product, store = row
        candidate = product_to_candidate(product, store)
    return ScoredCandidate.model_validate({**candidate.model_dump(), "match_score": 1.0})
