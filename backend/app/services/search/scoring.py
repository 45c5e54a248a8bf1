"""Textual relevance of a product title to an ingredient name."""

from typing import Iterable

from app.services.search.canonicalize import canonicalize

EXACT_SCORE = 1.0
SUBSTRING_SCORE = 0.8
WORD_OVERLAP_WEIGHT = 0.6


def score(candidate_name: str, canonical: str) -> float:
    """
    Score in [0, 1]; first matching rule wins:
    exact match 1.0, title contains the ingredient 0.8, otherwise
    0.6 * fraction of ingredient words found inside some title word, else 0.0.
    """
    name = canonicalize(candidate_name)
    if not name or not canonical:
        return 0.0
    if name == canonical:
        return EXACT_SCORE
    if canonical in name:
        return SUBSTRING_SCORE

    title_words = name.split(" ")
    wanted = canonical.split(" ")
    matched = sum(1 for word in wanted if any(word in t for t in title_words))
    if matched:
        return WORD_OVERLAP_WEIGHT * (matched / len(wanted))
    return 0.0


def best_score(candidate_name: str, terms: Iterable[str]) -> float:
    """Highest score against any of the terms (canonical name plus synonyms)."""
    return max((score(candidate_name, term) for term in terms), default=0.0)
