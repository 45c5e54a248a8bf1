"""
Ingredient-to-product ranking pipeline.

canonicalize -> synonyms -> concurrent fan-out to every catalog source ->
rescore, filter, rank, truncate. A failing or slow source is reported in
degraded_sources; only a search where every source failed raises.
"""

import asyncio
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Sequence

from app.config import Settings
from app.logging import get_logger
from app.schemas.product import (
    CandidateProduct,
    IngredientQuery,
    ScoredCandidate,
    SearchConstraints,
    SearchOutcome,
    StoreRef,
)
from app.services.search.canonicalize import canonicalize
from app.services.search.errors import InvalidQuery, SearchUnavailable, SourceUnavailable
from app.services.search.freshness import is_fresh
from app.services.search.scoring import best_score
from app.services.search.sources.base import CatalogSource
from app.services.search.synonyms import SynonymResolver, default_resolver
from app.utils.timing import time_span

logger = get_logger(__name__)

# Scores closer than this are ranked by price, then store name
SCORE_TIE_BAND = 0.1


@dataclass(frozen=True)
class SearchConfig:
    freshness_window_ms: int = 7 * 24 * 60 * 60 * 1000
    score_threshold: float = 0.1
    per_source_timeout_ms: int = 5000
    default_max_results: int = 10

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchConfig":
        return cls(
            freshness_window_ms=settings.search_freshness_window_hours * 60 * 60 * 1000,
            score_threshold=settings.search_score_threshold,
            per_source_timeout_ms=int(settings.search_per_source_timeout_s * 1000),
            default_max_results=settings.search_default_max_results,
        )


def _compare(a: ScoredCandidate, b: ScoredCandidate) -> int:
    if abs(a.match_score - b.match_score) > SCORE_TIE_BAND:
        return -1 if a.match_score > b.match_score else 1
    if a.price is not None and b.price is not None and a.price != b.price:
        return -1 if a.price < b.price else 1
    if a.store.name != b.store.name:
        return -1 if a.store.name < b.store.name else 1
    return 0


def rank(candidates: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Score descending (within the tie band: price ascending), then store name."""
    return sorted(candidates, key=cmp_to_key(_compare))


def passes_constraints(candidate: CandidateProduct, constraints: SearchConstraints) -> bool:
    """Inclusive price range (unknown price fails a set bound) and case-insensitive brand match."""
    if constraints.min_price is not None or constraints.max_price is not None:
        if candidate.price is None:
            return False
        if constraints.min_price is not None and candidate.price < constraints.min_price:
            return False
        if constraints.max_price is not None and candidate.price > constraints.max_price:
            return False
    if constraints.preferred_brands:
        wanted = {b.strip().lower() for b in constraints.preferred_brands}
        if not candidate.brand or candidate.brand.strip().lower() not in wanted:
            return False
    return True


class RankingPipeline:
    def __init__(
        self,
        sources: Sequence[CatalogSource],
        config: SearchConfig | None = None,
        synonyms: SynonymResolver | None = None,
    ) -> None:
        self._sources = list(sources)
        self._config = config or SearchConfig()
        self._synonyms = synonyms or default_resolver

    async def search(self, query: IngredientQuery) -> SearchOutcome:
        canonical = canonicalize(query.name)
        if not canonical:
            raise InvalidQuery(f"ingredient name {query.name!r} is empty after normalization")
        synonyms = self._synonyms.resolve(canonical)
        constraints = query.constraints
        logger.info(
            "search.start name=%s canonical=%s synonyms=%s sources=%s",
            query.name,
            canonical,
            sorted(synonyms),
            len(self._sources),
        )
        if not self._sources:
            logger.warning("search.no_sources canonical=%s", canonical)
            return SearchOutcome()

        with time_span("search.total", canonical=canonical):
            # gather keeps source order, so completion order never reaches the ranking
            settled = await asyncio.gather(
                *(self._query_source(source, canonical, synonyms, constraints) for source in self._sources)
            )

        degraded: list[StoreRef] = []
        candidates: list[CandidateProduct] = []
        for source, found in zip(self._sources, settled):
            if found is None:
                degraded.append(source.store)
            else:
                candidates.extend(found)
        if len(degraded) == len(self._sources):
            logger.error("search.unavailable canonical=%s degraded=%s", canonical, [s.id for s in degraded])
            raise SearchUnavailable(degraded)

        terms = [canonical, *sorted(synonyms)]
        scored: list[ScoredCandidate] = []
        for candidate in candidates:
            if not is_fresh(candidate, self._config.freshness_window_ms):
                continue
            if not passes_constraints(candidate, constraints):
                continue
            # Any score a source attached is ignored; scoring is uniform across sources
            match_score = best_score(candidate.name, terms)
            if match_score <= self._config.score_threshold:
                continue
            scored.append(ScoredCandidate.model_validate({**candidate.model_dump(), "match_score": match_score}))

        max_results = constraints.max_results or self._config.default_max_results
        results = rank(scored)[:max_results]
        logger.info(
            "search.end canonical=%s candidates=%s kept=%s returned=%s degraded=%s",
            canonical,
            len(candidates),
            len(scored),
            len(results),
            [s.id for s in degraded],
        )
        return SearchOutcome(results=results, degraded_sources=degraded)

    async def _query_source(
        self,
        source: CatalogSource,
        canonical: str,
        synonyms: frozenset[str],
        constraints: SearchConstraints,
    ) -> list[CandidateProduct] | None:
        """Candidates from one source, or None when it failed or timed out."""
        timeout_s = self._config.per_source_timeout_ms / 1000
        try:
            with time_span("search.source", source=source.store.id):
                return list(await asyncio.wait_for(source.query(canonical, synonyms, constraints), timeout_s))
        except asyncio.TimeoutError:
            logger.warning("search.source.timeout source=%s timeout_s=%s", source.store.id, timeout_s)
        except SourceUnavailable as exc:
            logger.warning("search.source.unavailable source=%s reason=%s", source.store.id, exc.reason)
        except Exception as exc:
            logger.warning(
                "search.source.failed source=%s error=%s", source.store.id, exc, exc_info=True
            )
        return None
