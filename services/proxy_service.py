"""Fetch-and-rewrite pipeline behind the /proxy route."""

from dataclasses import dataclass

from core.config import RewriteSettings
from core.exceptions import InvalidInput
from core.params import is_absolute_url
from core.rewrite import rewrite_search_page, should_rewrite
from services.upstream import UpstreamClient


@dataclass(frozen=True)
class ProxiedPage:
    """Body ready to be written back to the caller."""

    url: str
    body: str
    rewritten: bool


class ProxyService:
    """Validate, fetch and conditionally rewrite a target page."""

    def __init__(self, upstream: UpstreamClient, settings: RewriteSettings) -> None:
        self._upstream = upstream
        self._settings = settings

    async def fetch_page(self, url: str | None) -> ProxiedPage:
        """Run the pipeline for url.

        Raises:
            InvalidInput: url missing or not an absolute http(s) URL
            UpstreamFailure: upstream answered outside 200-299
            TransportFailure: no response could be obtained
        """
        if not is_absolute_url(url):
            raise InvalidInput("Invalid URL")

        response = await self._upstream.fetch(url)
        if not should_rewrite(url, self._settings.marker):
            return ProxiedPage(url=url, body=response.text, rewritten=False)

        body = rewrite_search_page(response.text, self._settings.base_url)
        return ProxiedPage(url=url, body=body, rewritten=True)
