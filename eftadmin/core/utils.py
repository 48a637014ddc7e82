import time
from typing import Optional

# Upper bound on how much of an error body is carried into exception text
MAX_ERROR_BODY_CHARS = 4096


def deadline_after(seconds: Optional[float]) -> Optional[float]:
    """Return a monotonic deadline ``seconds`` from now, or None."""
    if seconds is None:
        return None
    return time.monotonic() + seconds


def remaining_seconds(deadline: Optional[float]) -> Optional[float]:
    """Seconds left until ``deadline`` (may be negative), or None if unbounded."""
    if deadline is None:
        return None
    return deadline - time.monotonic()


def trim_body(text: str, limit: int = MAX_ERROR_BODY_CHARS) -> str:
    """Strip surrounding whitespace and cap the length of a response body."""
    text = (text or "").strip()
    if len(text) > limit:
        return text[:limit] + "...(truncated)"
    return text


__all__ = [
    "deadline_after",
    "remaining_seconds",
    "trim_body",
]
