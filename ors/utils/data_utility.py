"""
Lenient conversions from raw request strings to typed values.

Blank or unparsable numbers resolve to ``0`` and blank or unparsable dates to
``None``; none of these helpers raise.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%d-%m-%Y")


def get_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def get_int(value: Any) -> int:
    text = get_string(value)
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


# integer and long collapse to the same Python type
get_long = get_int


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = get_string(value)
    if text is None:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def get_timestamp(millis: int) -> Optional[datetime]:
    """Convert epoch milliseconds into a naive UTC datetime; None when out of range."""

    if millis <= 0:
        return None
    try:
        moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return moment.replace(tzinfo=None)


def to_millis(moment: Optional[datetime]) -> int:
    if moment is None:
        return 0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def current_timestamp() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


CONVERTERS = {
    "string": get_string,
    "int": get_int,
    "long": get_long,
    "date": parse_date,
}


def convert(kind: str, value: Any) -> Any:
    return CONVERTERS[kind](value)
