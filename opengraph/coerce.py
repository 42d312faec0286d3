"""Best-effort typing of Open Graph ``content`` strings.

Precedence is fixed: boolean literal -> number -> date -> string.  A value
that matches an earlier rule never reaches a later one, so ``"true"`` is
never a date and ``"2024"`` is never a year.
"""

from __future__ import annotations

import calendar
import logging
import re
import sys
from datetime import datetime

import dateparser

from opengraph.options import ParseOptions
from opengraph.settings import (
    DATE_LANGUAGES,
    DATE_PARSER_SETTINGS,
    MAX_YEAR,
    MIN_YEAR,
)

logger = logging.getLogger(__name__)

CoercedValue = bool | int | float | datetime | str

_BOOLEANS = {"true": True, "false": False}

_NUMERIC_RE = re.compile(
    r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$",
)


def is_numeric(text: str) -> bool:
    """True for decimal integer, float and exponent literals."""
    return bool(_NUMERIC_RE.match(text))


def coerce_number(text: str) -> int | float:
    """Convert a numeric literal to ``int`` or ``float``.

    Integers at or beyond the platform word size, or too long to convert,
    become floats.
    """
    if "." in text or "e" in text.lower():
        return float(text)
    try:
        number = int(text)
    except ValueError:
        # Longer than the interpreter allows for str -> int.
        return float(text)
    if number >= sys.maxsize:
        return float(text)
    return number


def _is_calendar_date(dt: datetime) -> bool:
    # Only year/month/day are checked; time-of-day is taken as parsed.
    if not MIN_YEAR <= dt.year <= MAX_YEAR:
        return False
    if not 1 <= dt.month <= 12:
        return False
    return 1 <= dt.day <= calendar.monthrange(dt.year, dt.month)[1]


def parse_date(text: str) -> datetime | None:
    """Parse *text* as a date in any format dateparser understands."""
    try:
        parsed = dateparser.parse(
            text,
            languages=DATE_LANGUAGES,
            settings=DATE_PARSER_SETTINGS,
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", text, exc)
        return None
    if parsed is None or not _is_calendar_date(parsed):
        return None
    return parsed


def coerce_date(text: str, options: ParseOptions) -> datetime | str | None:
    """Return *text* as a datetime or formatted date string, or None."""
    parsed = parse_date(text)
    if parsed is None:
        return None

    if parsed.tzinfo is None:
        # No zone in the tag: read it as local time.
        try:
            parsed = parsed.astimezone()
        except (OverflowError, OSError, ValueError):
            logger.debug("Could not localise %r, keeping it naive", text)

    tz = options.tzinfo
    if tz is not None:
        try:
            parsed = parsed.astimezone(tz)
        except (OverflowError, OSError, ValueError):
            logger.debug("%r falls outside the datetime range in %s", text, options.timezone)
            return None

    if options.wants_object:
        return parsed
    return parsed.strftime(options.date)


def coerce_value(text: str, options: ParseOptions | None = None) -> CoercedValue:
    """Coerce a raw ``content`` attribute according to *options*."""
    options = options or ParseOptions()
    if not options.cast or not text:
        return text

    if text in _BOOLEANS:
        return _BOOLEANS[text]

    if is_numeric(text):
        return coerce_number(text)

    date = coerce_date(text, options)
    if date is not None:
        return date

    return text
