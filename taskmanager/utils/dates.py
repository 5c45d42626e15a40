from datetime import date, datetime, time, timezone
from typing import Optional


def truncate_to_millis(value: datetime) -> datetime:
    # BSON dates only keep millisecond precision
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the way pymongo hands dates back."""
    return truncate_to_millis(datetime.now(timezone.utc).replace(tzinfo=None))


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    Accepts the ``Z`` suffix produced by JavaScript's ``toISOString``. Naive
    input is taken to be UTC already. Raises ``ValueError`` on anything else.
    """
    if not isinstance(value, str):
        raise ValueError("must be an ISO-8601 timestamp string")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError("must be an ISO-8601 timestamp string") from None
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # Offset pushes the instant outside years 1..9999
            raise ValueError("must be an ISO-8601 timestamp string") from None
    return truncate_to_millis(parsed)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a stored datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def end_of_day(day: str) -> str:
    """``2025-01-12`` -> ``2025-01-12T23:59:59.999Z``."""
    parsed = date.fromisoformat(day)
    return to_iso(datetime.combine(parsed, time(23, 59, 59, 999000)))
