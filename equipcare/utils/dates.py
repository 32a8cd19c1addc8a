"""Date helpers for ordering records by free-form date fields."""

from datetime import date, datetime, timezone
from functools import cmp_to_key
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

# Tried in order after ISO 8601.
_EXTRA_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)


def parse_calendar_date(raw: Optional[str]) -> Optional[datetime]:
    """
    Interpret a stored date string as a point in time.

    Returns None for anything that is not a recognizable calendar date
    ("Today", "Mid Month", empty strings). Aware values are normalized to
    naive UTC so that every parsed value is comparable.
    """
    if not raw or not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _EXTRA_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def compare_date_strings(a: str, b: str) -> int:
    """
    Compare two raw date fields.

    Both parse -> chronological order. Otherwise the raw strings are
    compared lexicographically, so mixed lists are not strictly date-ordered.
    """
    date_a = parse_calendar_date(a)
    date_b = parse_calendar_date(b)
    if date_a is not None and date_b is not None:
        return (date_a > date_b) - (date_a < date_b)

    a = a or ""
    b = b or ""
    return (a > b) - (a < b)


def sort_by_date(items: Iterable[T], get_date: Callable[[T], str]) -> list[T]:
    """Return items in ascending order of their date field."""
    return sorted(
        items,
        key=cmp_to_key(lambda left, right: compare_date_strings(get_date(left), get_date(right)))
    )


def today_iso() -> str:
    """Current local date as YYYY-MM-DD (default for schedule forms)."""
    return date.today().isoformat()
