"""Ingredient-to-product resolution and ranking."""

from app.services.search.canonicalize import canonicalize
from app.services.search.errors import InvalidQuery, SearchError, SearchUnavailable, SourceUnavailable
from app.services.search.pipeline import RankingPipeline, SearchConfig
from app.services.search.scoring import score
from app.services.search.synonyms import SynonymResolver

__all__ = [
    "canonicalize",
    "score",
    "InvalidQuery",
    "SearchError",
    "SearchUnavailable",
    "SourceUnavailable",
    "RankingPipeline",
    "SearchConfig",
    "SynonymResolver",
]
