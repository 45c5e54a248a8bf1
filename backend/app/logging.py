import logging
import sys
from typing import Iterable, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_NAME = "pantry_finder.stdout"


def resolve_level(level: str | int) -> int:
    """'debug' / 'DEBUG' / 10 -> 10; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO", quiet: Iterable[str] = ("httpx", "httpcore")) -> None:
    """Install the stdout handler on the root logger once and cap chatty client libraries at WARNING."""
    root = logging.getLogger()
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolve_level(level))
    # sources log their own outbound calls
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "pantry_finder")
