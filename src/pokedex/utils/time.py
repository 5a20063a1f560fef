"""Time utilities for cache bookkeeping and UTC timestamp formatting."""

from datetime import datetime, timezone

# fetched_at value of a cache that has never been filled
EPOCH = 0.0


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Args:
        dt: Datetime object (must be timezone-aware)

    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-12-23T00:27:07.804867Z')

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def timestamp_to_utc_z(timestamp: float) -> str | None:
    """Format a POSIX timestamp as ISO 8601 UTC, or None for the epoch sentinel."""
    if timestamp <= EPOCH:
        return None
    return to_utc_z(datetime.fromtimestamp(timestamp, tz=timezone.utc))
