import re

_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def canonicalize(raw: str) -> str:
    """
    Normalize an ingredient or product name for matching.
    Lowercase, drop anything that is not a letter, digit or space, collapse
    whitespace runs and trim. "  Bell   Pepper! " -> "bell pepper".
    Idempotent; never raises.
    """
    if not raw:
        return ""
    text = _NON_WORD.sub("", raw.lower())
    return _WHITESPACE.sub(" ", text).strip()
