"""Calendar arithmetic for event timestamps."""

import math
from datetime import UTC, datetime, timedelta

SECONDS_PER_DAY = timedelta(days=1).total_seconds()


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken to be UTC.

    Raises:
        ValueError: If the string is not ISO-8601.
        TypeError: If the value is neither a string nor a datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise TypeError(f"Expected ISO-8601 string or datetime, got {type(value).__name__}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def days_between(first: str | datetime, second: str | datetime) -> int:
    """Return the whole days between two instants, rounding partial days up.

    The result does not depend on argument order:
    ``ceil(|second - first| / 1 day)``.

    Raises:
        ValueError: If either string is not ISO-8601.
    """
    delta = parse_timestamp(second) - parse_timestamp(first)
    return math.ceil(abs(delta.total_seconds()) / SECONDS_PER_DAY)
