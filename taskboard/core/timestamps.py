"""ISO-8601 timestamp helpers shared by the store, query engine and validators."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_iso(value: datetime) -> str:
    """Render a datetime as fixed-width ISO-8601 UTC with a ``Z`` suffix.

    Microseconds are always present so that string order matches time order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into an aware datetime.

    Naive values are interpreted as UTC.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def try_parse_timestamp(value: str | None) -> datetime | None:
    """Parse a timestamp, returning None for missing or malformed values."""
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        return None
