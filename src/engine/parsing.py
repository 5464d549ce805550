"""
Tolerant input parsing.

Every raw value that enters the engine goes through this module.
Nothing here raises: blank or malformed text becomes a default so that
a half-typed form still produces a projection.

Numbers follow the leading-number rule the form has always used:
"12abc" reads as 12, "abc" and "" read as the default.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError


_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_DATE_ADAPTER = TypeAdapter(date)
_DATETIME_ADAPTER = TypeAdapter(datetime)

SECONDS_PER_DAY = 24 * 60 * 60


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_amount(value: Any, default: float = 0.0) -> float:
    """
    Read a number from user input.

    Accepts str, int, float and Decimal. Strings use the longest leading
    number. Booleans, non-finite values and anything unreadable give
    `default`.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return default
        return number if math.isfinite(number) else default

    if not isinstance(value, str):
        return default

    match = _LEADING_NUMBER.match(value.strip())
    if match is None:
        return default

    number = float(match.group(0))
    return number if math.isfinite(number) else default


def is_parsable_amount(value: Any) -> bool:
    """True when the whole value reads as a finite number."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        try:
            return math.isfinite(float(value))
        except (OverflowError, ValueError):
            return False
    if not isinstance(value, str):
        return False

    text = value.strip()
    match = _LEADING_NUMBER.fullmatch(text)
    return match is not None and math.isfinite(float(text))


def parse_moment(value: Any) -> Optional[datetime]:
    """
    Read a calendar date (or date-time) from user input.

    Returns a naive datetime, or None when the value is blank or
    unreadable. Aware values are converted to UTC first so any two
    results can be subtracted.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        moment = _parse_text_moment(text)
        if moment is None:
            return None
    else:
        return None

    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # Converted value falls outside datetime.min..datetime.max
            return None
    return moment


def _parse_text_moment(text: str) -> Optional[datetime]:
    # Bare numbers would otherwise be read as Unix timestamps
    if _LEADING_NUMBER.fullmatch(text):
        return None

    try:
        day = _DATE_ADAPTER.validate_python(text)
        return datetime(day.year, day.month, day.day)
    except ValidationError:
        pass

    try:
        return _DATETIME_ADAPTER.validate_python(text)
    except ValidationError:
        return None


def count_season_days(start: datetime, end: datetime) -> int:
    """Whole days between two moments, rounding a partial day up."""
    elapsed = abs(end - start)
    return math.ceil(elapsed.total_seconds() / SECONDS_PER_DAY)
