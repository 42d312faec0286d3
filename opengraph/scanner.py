"""Tag scanner: pull ``og:`` property/content pairs out of a parsed page."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup, Tag

from opengraph.settings import HTML_PARSER, OG_PREFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetaPair:
    """One ``<meta property="og:..." content="...">`` tag.

    ``property`` has the ``og:`` prefix removed and hyphens turned into
    underscores; ``content`` is the raw attribute value.
    """

    property: str
    content: str


def _safe_str(val: Any, default: str = "") -> str:
    """Safely convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def normalize_property(raw: str) -> str | None:
    """Strip the ``og:`` prefix and map ``-`` to ``_``.

    Returns None when *raw* is not an Open Graph property.
    """
    if not raw.startswith(OG_PREFIX):
        return None
    return raw[len(OG_PREFIX):].replace("-", "_")


def make_soup(html: str | bytes) -> BeautifulSoup | None:
    """Parse *html* with the tolerant tree builder."""
    try:
        return BeautifulSoup(html, HTML_PARSER)
    except Exception as exc:
        logger.debug("HTML tree construction failed: %s", exc)
        return None


def has_meta_tags(soup: BeautifulSoup) -> bool:
    return soup.find("meta") is not None


def iter_meta_pairs(soup: BeautifulSoup) -> Iterator[MetaPair]:
    """Yield a :class:`MetaPair` for every Open Graph meta tag, in document order."""
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag) or not tag.has_attr("property"):
            continue
        key = normalize_property(_safe_str(tag.get("property")))
        if key is None:
            continue
        yield MetaPair(key, _safe_str(tag.get("content")))
