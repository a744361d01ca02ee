"""Link rewriting for search result pages.

Each pass is a pure ``str -> str`` function over the raw response text. No
parse tree is built, so unusual markup can slip past or be matched by these
patterns; that is accepted.
"""

import logging
import re
from collections.abc import Callable
from urllib.parse import parse_qsl

from core.params import DESTINATION_KEYS, first_param, proxy_path

logger = logging.getLogger(__name__)

SEARCH_HREF_DOUBLE = re.compile(r'href="/(search\?[^"]*)"')
SEARCH_HREF_SINGLE = re.compile(r"href='/(search\?[^']*)'")
REDIRECT_HREF_DOUBLE = re.compile(r'href="/url\?([^"]*)"')
REDIRECT_HREF_SINGLE = re.compile(r"href='/url\?([^']*)'")
SEARCH_ACTION = re.compile(r"""action=(["'])/search\1""")

RewritePass = Callable[[str], str]


def should_rewrite(url: str, marker: str) -> bool:
    """Rewriting applies when the target URL contains the marker substring."""
    return marker in url


def _parse_destination(query: str) -> str | None:
    """Extract the q/url destination from a query string, None if absent or unparsable."""
    try:
        params: dict[str, str] = {}
        for key, value in parse_qsl(query, keep_blank_values=True, errors="strict"):
            # First occurrence wins
            params.setdefault(key, value)
    except ValueError as e:
        logger.debug("Skipping unparsable /url query %r: %s", query, e)
        return None
    return first_param(params, DESTINATION_KEYS)


def rewrite_search_hrefs(body: str, base_url: str) -> str:
    """Point href="/search?..." and href='/search?...' at the proxy."""
    body = SEARCH_HREF_DOUBLE.sub(
        lambda m: 'href="' + proxy_path(f"{base_url}/{m.group(1)}") + '"', body
    )
    return SEARCH_HREF_SINGLE.sub(
        lambda m: "href='" + proxy_path(f"{base_url}/{m.group(1)}") + "'", body
    )


def _redirect_href_replacer(quote_char: str) -> Callable[[re.Match[str]], str]:
    def replace(m: re.Match[str]) -> str:
        destination = _parse_destination(m.group(1))
        if not destination:
            return m.group(0)
        return f"href={quote_char}{proxy_path(destination)}{quote_char}"

    return replace


def rewrite_redirect_hrefs(body: str) -> str:
    """Unwrap href="/url?q=..." redirect links into direct proxy links."""
    body = REDIRECT_HREF_DOUBLE.sub(_redirect_href_replacer('"'), body)
    return REDIRECT_HREF_SINGLE.sub(_redirect_href_replacer("'"), body)


def rewrite_search_actions(body: str, base_url: str) -> str:
    """Send the search form (action="/search") through the proxy."""
    target = proxy_path(f"{base_url}/search")
    return SEARCH_ACTION.sub(lambda m: f"action={m.group(1)}{target}{m.group(1)}", body)


def search_page_passes(base_url: str) -> list[RewritePass]:
    """Rewrite passes for a search results page, in application order."""
    return [
        lambda body: rewrite_search_hrefs(body, base_url),
        rewrite_redirect_hrefs,
        lambda body: rewrite_search_actions(body, base_url),
    ]


def rewrite_search_page(body: str, base_url: str) -> str:
    """Apply every search page pass to body."""
    for rewrite in search_page_passes(base_url):
        body = rewrite(body)
    return body
