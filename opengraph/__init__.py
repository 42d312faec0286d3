"""opengraph - read Open Graph ``<meta property="og:...">`` data from HTML.

Usage::

    from opengraph import parse

    graph = parse(html, {"timezone": "UTC"})
    if graph is not None:
        print(graph.keys())
        print(graph.get("title"))
        print(graph.has_location())

Repeated and nested properties (``og:image`` / ``og:image:width``) come back
as a tuple of :class:`Slot` mappings::

    for image in graph.get("image", ()):
        print(image["value"], image.get("width"))
"""

from opengraph.graph import (
    TYPE_GROUPS,
    GraphBuilder,
    GraphCursor,
    OpenGraph,
    Slot,
    aggregate,
    schema_for_type,
)
from opengraph.options import ParseOptions
from opengraph.query import FetchError, fetch, fetch_html, parse
from opengraph.scanner import MetaPair, iter_meta_pairs

__version__ = "0.1.0"
__all__ = [
    "TYPE_GROUPS",
    "FetchError",
    "GraphBuilder",
    "GraphCursor",
    "MetaPair",
    "OpenGraph",
    "ParseOptions",
    "Slot",
    "aggregate",
    "fetch",
    "fetch_html",
    "iter_meta_pairs",
    "parse",
    "schema_for_type",
]
