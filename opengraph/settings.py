"""Default settings for opengraph parsing and fetching."""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR

# ---------------------------------------------------------------------------
# Tag selection
# ---------------------------------------------------------------------------
OG_PREFIX = "og:"

# BeautifulSoup tree builder. lxml recovers silently from broken markup.
HTML_PARSER = "lxml"

# ---------------------------------------------------------------------------
# Date coercion
# ---------------------------------------------------------------------------
# Strict ISO-8601 with numeric UTC offset, e.g. 2024-01-15T09:30:00+0000
ISO8601 = "%Y-%m-%dT%H:%M:%S%z"

# Values of the ``date`` option that return datetime objects instead of strings
DATE_OBJECT_MODES = frozenset({"object", "datetime"})

DATE_LANGUAGES = ["en"]

DATE_PARSER_SETTINGS = {
    "PREFER_DAY_OF_MONTH": "first",
    "PREFER_LOCALE_DATE_ORDER": False,
}

# Bounds accepted by the calendar validity check
MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR

# ---------------------------------------------------------------------------
# HTTP fetch
# ---------------------------------------------------------------------------
DEFAULT_TIMEOUT = 30

FOLLOW_REDIRECTS = True

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

RETRY_CODES = frozenset({429, 500, 502, 503, 504})
