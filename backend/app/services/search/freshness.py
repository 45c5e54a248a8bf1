from datetime import datetime, timedelta, timezone

from app.schemas.product import CandidateProduct


def as_utc(ts: datetime) -> datetime:
    """Naive timestamps (e.g. read back from sqlite) are taken to be UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def is_fresh(candidate: CandidateProduct, window_ms: int, now: datetime | None = None) -> bool:
    """True when the candidate's price data is no older than window_ms."""
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    return now - as_utc(candidate.last_updated) <= timedelta(milliseconds=window_ms)


def fresh_since(window_ms: int, now: datetime | None = None) -> datetime:
    """Oldest last_updated that still counts as fresh."""
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    return now - timedelta(milliseconds=window_ms)
