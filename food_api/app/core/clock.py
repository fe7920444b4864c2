"""Wall-clock source used to stamp ``createdAt`` and ``updatedAt``."""

from datetime import datetime, timezone


def current_time() -> datetime:
    """Return the current UTC time truncated to whole milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
