"""General utility helpers."""
from __future__ import annotations

import logging
import math
import os
import random
import re
import string
from datetime import date, datetime, timezone
from typing import Any, Mapping

logger = logging.getLogger(__name__)


SLUG_STRIP_PATTERN = re.compile(r"[^\w\s-]")
SLUG_SEPARATOR_PATTERN = re.compile(r"[\s_-]+")

DEFAULT_DATE_FORMAT = "{month} {day}, {year}"

STATUS_COLORS = {
    "Available": "bg-green-100 text-green-800",
    "Reserved": "bg-yellow-100 text-yellow-800",
    "Sold": "bg-gray-100 text-gray-800",
    "Keeping": "bg-blue-100 text-blue-800",
    "Active": "bg-green-100 text-green-800",
    "Retired": "bg-purple-100 text-purple-800",
    "Guardian Home": "bg-indigo-100 text-indigo-800",
}
DEFAULT_STATUS_COLOR = "bg-gray-100 text-gray-800"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def slugify(value: str) -> str:
    """Return a URL-friendly slug for the provided value."""

    value = value.lower().strip()
    value = SLUG_STRIP_PATTERN.sub("", value)
    value = SLUG_SEPARATOR_PATTERN.sub("-", value)
    return value.strip("-")


def timestamp() -> str:
    """Return an ISO-8601 timestamp in UTC."""

    return datetime.now(timezone.utc).isoformat()


def env_bool(name: str, default: bool = False, environ: Mapping[str, str] | None = None) -> bool:
    """Parse a boolean environment variable."""

    value = (os.environ if environ is None else environ).get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date or timestamp, returning ``None`` when it is unusable."""

    if not value:
        return None
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug("Unparseable date value %r", value)
        return None


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO timestamp into an aware UTC datetime."""

    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: str | None, fmt: str | None = None) -> str:
    """Format a date string for display, e.g. ``January 5, 2024``.

    ``fmt`` is a ``strftime`` pattern overriding the default long form.
    """

    parsed = parse_date(value)
    if parsed is None:
        return ""
    if fmt:
        return parsed.strftime(fmt)
    return DEFAULT_DATE_FORMAT.format(
        month=parsed.strftime("%B"), day=parsed.day, year=parsed.year
    )


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def calculate_age(dob: str | None, today: date | None = None) -> str:
    """Describe an age from a date of birth, e.g. ``1 year, 2 months old``.

    A month only counts once its day of the month has been reached, so
    kittens a few days old across a month boundary still read in days.
    """

    birth = parse_date(dob)
    if birth is None:
        return ""
    reference = today or date.today()

    years = reference.year - birth.year
    months = reference.month - birth.month
    if reference.day < birth.day:
        months -= 1
    if months < 0:
        years -= 1
        months += 12

    if years <= 0:
        if months == 0:
            days = (reference - birth).days
            return f"{_plural(days, 'day')} old"
        return f"{_plural(months, 'month')} old"
    if months == 0:
        return f"{_plural(years, 'year')} old"
    return f"{_plural(years, 'year')}, {_plural(months, 'month')} old"


def format_price(price: float | int | None) -> str:
    """Format a USD price without cents; ``None`` asks visitors to get in touch."""

    if price is None:
        return "Contact for price"
    amount = math.floor(abs(float(price)) + 0.5)
    sign = "-" if price < 0 and amount else ""
    return f"{sign}${amount:,}"


def status_color(status: str) -> str:
    """Return the badge CSS classes for a cat or kitten status."""

    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def generate_id(length: int = 7) -> str:
    """Return a short random identifier for client-side markup only."""

    return "".join(random.choice(_ID_ALPHABET) for _ in range(length))


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def safe_get(obj: Any, path: str, default: Any = None) -> Any:
    """Walk a dotted path through mappings and attributes."""

    result = obj
    for key in path.split("."):
        if result is None:
            return default
        if isinstance(result, Mapping):
            result = result.get(key)
        else:
            result = getattr(result, key, None)
    return default if result is None else result
