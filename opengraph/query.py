"""opengraph.query - parse and fetch entry points.

Basic usage::

    from opengraph import parse

    graph = parse(html)
    if graph is not None:
        print(graph.get("title"))
        for image in graph.get("image", ()):
            print(image["value"], image.get("width"))

Remote pages::

    from opengraph import fetch

    graph = fetch("https://example.com/movie", {"date": "object"}, timeout=10)

HTTP goes through the stdlib (``urllib``).  Retrying is left to the caller
unless ``max_retries`` is passed explicitly.
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from opengraph.graph import OpenGraph, aggregate
from opengraph.options import ParseOptions
from opengraph.scanner import has_meta_tags, iter_meta_pairs, make_soup
from opengraph.settings import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    FOLLOW_REDIRECTS,
    RETRY_CODES,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
        body   -- decoded error body, when the server sent one
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int = 0,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse(
    html: str | bytes | None,
    options: ParseOptions | Mapping[str, Any] | None = None,
) -> OpenGraph | None:
    """Extract Open Graph data from *html*.

    Args:
        html:    Page markup.  Broken markup is tolerated.
        options: :class:`ParseOptions` or a mapping with any of ``date``,
                 ``timezone`` and ``cast``.

    Returns:
        :class:`OpenGraph`, or None when the input is empty or carries no
        ``og:`` meta tags.

    Raises:
        ValueError: On unknown or invalid options.
    """
    opts = ParseOptions.coerce(options)
    if not html:
        logger.debug("Nothing to parse: empty input")
        return None

    soup = make_soup(html)
    if soup is None:
        return None
    if not has_meta_tags(soup):
        logger.debug("No <meta> tags found")
        return None

    graph = aggregate(iter_meta_pairs(soup), opts)
    if graph is None:
        logger.debug("No og: properties among <meta> tags")
    return graph


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: ANN001
        return None


def _decode_response_body(raw: bytes, headers: Any | None) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    if encoding == "gzip":
        raw = gzip.decompress(raw)
    elif encoding in ("deflate", "zlib"):
        raw = zlib.decompress(raw)

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _retry_delay(attempt: int) -> float:
    return (2 ** attempt) + random.uniform(0, 1)


def fetch_html(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
    follow_redirects: bool = FOLLOW_REDIRECTS,
    max_retries: int = 0,
    proxy: str | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Args:
        url:              Fully-qualified HTTP/HTTPS URL.
        timeout:          Request timeout in seconds.
        user_agent:       Override the default browser User-Agent string.
        follow_redirects: Follow 3xx responses (useful for short URLs).  When
                          off, a redirect raises :class:`FetchError`.
        max_retries:      Extra attempts on 429/5xx and network failures,
                          with jittered exponential backoff (default 0).
        proxy:            Optional proxy URL (``"http://host:port"``).

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    handlers: list[urllib.request.BaseHandler] = []
    if proxy:
        handlers.append(urllib.request.ProxyHandler({"http": proxy, "https": proxy}))
    if not follow_redirects:
        handlers.append(_NoRedirectHandler())
    _open = urllib.request.build_opener(*handlers).open if handlers else urllib.request.urlopen

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with _open(req, timeout=timeout) as resp:
                raw: bytes = resp.read()
                try:
                    return _decode_response_body(raw, resp.headers)
                except (OSError, zlib.error) as exc:
                    raise FetchError(
                        f"Could not decompress response from {url}: {exc}", url=url,
                    ) from exc

        except urllib.error.HTTPError as exc:
            body_text = ""
            try:
                raw = exc.read()
                if raw:
                    body_text = _decode_response_body(raw, exc.headers)
            except Exception:
                body_text = ""
            err = FetchError(
                f"HTTP {exc.code} fetching {url}: {exc.reason}",
                url=url,
                status=exc.code,
                body=body_text,
            )
            if exc.code in RETRY_CODES and attempt < max_retries:
                delay = _retry_delay(attempt)
                logger.debug(
                    "HTTP %d for %s, retrying in %.1fs (attempt %d/%d)",
                    exc.code, url, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                last_exc = err
                continue
            raise err from exc

        except urllib.error.URLError as exc:
            err = FetchError(f"URL error fetching {url}: {exc.reason}", url=url)
            if attempt < max_retries:
                delay = _retry_delay(attempt)
                logger.debug(
                    "URL error for %s, retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc.reason,
                )
                time.sleep(delay)
                last_exc = err
                continue
            raise err from exc

        except OSError as exc:
            err = FetchError(f"Network error fetching {url}: {exc}", url=url)
            if attempt < max_retries:
                delay = _retry_delay(attempt)
                logger.debug(
                    "Network error for %s, retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc,
                )
                time.sleep(delay)
                last_exc = err
                continue
            raise err from exc

    raise last_exc or FetchError(f"All retries exhausted for {url}", url=url)


def fetch(
    url: str,
    options: ParseOptions | Mapping[str, Any] | None = None,
    **fetch_kwargs: Any,
) -> OpenGraph | None:
    """Fetch *url* and parse it for Open Graph data.

    Keyword arguments are forwarded to :func:`fetch_html`.

    Raises:
        FetchError: When the page cannot be retrieved.
    """
    opts = ParseOptions.coerce(options)
    html = fetch_html(url, **fetch_kwargs)
    return parse(html, opts)
