"""Human timeframe expressions ("5 minutes", "2 days") to milliseconds."""

import re
from typing import Optional

from fraudquery.core.domain.errors import (
    DurationOverflowError,
    InvalidFormatError,
    InvalidNumberError,
    NegativeDurationError,
    UnknownUnitError,
)

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS
MONTH_MS = 30 * DAY_MS  # approximated
YEAR_MS = 365 * DAY_MS  # approximated

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

UNIT_MILLIS: dict[str, int] = {
    "second": SECOND_MS,
    "seconds": SECOND_MS,
    "minute": MINUTE_MS,
    "minutes": MINUTE_MS,
    "hour": HOUR_MS,
    "hours": HOUR_MS,
    "day": DAY_MS,
    "days": DAY_MS,
    "week": WEEK_MS,
    "weeks": WEEK_MS,
    "month": MONTH_MS,
    "months": MONTH_MS,
    "year": YEAR_MS,
    "years": YEAR_MS,
}

_INTEGER = re.compile(r"[+-]?[0-9]+")
_WHITESPACE = re.compile(r"[ \t\n\x0b\f\r]+")
_MAX_DIGITS = len(str(INT64_MAX))


def parse_duration_to_millis(text: Optional[str]) -> int:
    """
    Parse a '<number> <unit>' expression into milliseconds.

    Blank or missing input means "no timeframe" and yields 0.

    Args:
        text: Expression such as "5 minutes" or "1 YEAR"

    Returns:
        Duration in milliseconds

    Raises:
        InvalidFormatError: If the input is not exactly two tokens
        InvalidNumberError: If the count is not a 64-bit integer
        UnknownUnitError: If the unit is not recognized
        NegativeDurationError: If the count is negative
        DurationOverflowError: If the result exceeds 64 bits
    """
    if text is None or not text.strip():
        return 0

    parts = _WHITESPACE.split(text.strip(" \t\n\x0b\f\r"))
    if len(parts) != 2:
        raise InvalidFormatError("Invalid format, expected: '<number> <timeunit>'")

    number, unit = parts
    if not _INTEGER.fullmatch(number):
        raise InvalidNumberError(f"Invalid number: {number}")
    if len(number.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        raise InvalidNumberError(f"Invalid number: {number[:32]}...")
    value = int(number)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidNumberError(f"Invalid number: {number}")

    unit = unit.lower()
    multiplier = UNIT_MILLIS.get(unit)
    if multiplier is None:
        raise UnknownUnitError(f"Unknown time unit: {unit}")

    if value < 0:
        raise NegativeDurationError(f"Negative timeframe: {number} {unit}")

    millis = value * multiplier
    if millis > INT64_MAX:
        raise DurationOverflowError(f"Timeframe too large: {number} {unit}")
    return millis


class DurationParser:
    """Callable wrapper so the parser can be injected and swapped in tests."""

    def parse(self, text: Optional[str]) -> int:
        return parse_duration_to_millis(text)

    __call__ = parse
