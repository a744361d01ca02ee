"""Destination URL validation and query parameter lookup."""

import re
from collections.abc import Iterable, Mapping
from urllib.parse import quote

ABSOLUTE_URL_PATTERN = re.compile(r"^https?://.+")

# Keys accepted by the legacy /url route, highest priority first
DESTINATION_KEYS = ("q", "url")

# Characters left alone by JavaScript's encodeURIComponent, besides alphanumerics and "-_.~"
_COMPONENT_SAFE = "!*'()"


def is_absolute_url(value: str | None) -> bool:
    """Check that value is an http(s) URL with something after the scheme."""
    return bool(value) and ABSOLUTE_URL_PATTERN.match(value) is not None


def first_param(params: Mapping[str, str], keys: Iterable[str] = DESTINATION_KEYS) -> str | None:
    """Return the first non-empty value among keys, in order."""
    for key in keys:
        value = params.get(key)
        if value:
            return value
    return None


def encode_component(value: str) -> str:
    """Percent-encode value the way encodeURIComponent does."""
    return quote(value, safe=_COMPONENT_SAFE)


def proxy_path(destination: str) -> str:
    """Build the proxy route path for an absolute destination URL."""
    return "/proxy?url=" + encode_component(destination)
