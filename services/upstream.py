"""Outbound fetch for proxied pages."""

import httpx

from core.config import UpstreamSettings
from core.exceptions import TransportFailure, UpstreamFailure
from core.request_types import UpstreamResponse


class UpstreamClient:
    """Issue a single GET per proxied request."""

    def __init__(self, client: httpx.AsyncClient, settings: UpstreamSettings) -> None:
        self._client = client
        self._settings = settings

    async def fetch(self, url: str) -> UpstreamResponse:
        """Fetch url and buffer the whole body as text.

        Raises:
            UpstreamFailure: upstream answered outside 200-299
            TransportFailure: no response could be obtained
        """
        try:
            response = await self._client.get(
                url,
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.timeout,
                follow_redirects=self._settings.follow_redirects,
            )
        except httpx.RequestError as e:
            raise TransportFailure(f"{type(e).__name__}: {e}") from e
        except httpx.InvalidURL as e:
            raise TransportFailure(f"Invalid URL: {e}") from e

        result = UpstreamResponse(
            status_code=response.status_code,
            status_text=response.reason_phrase,
            text=response.text,
        )
        if not result.ok:
            raise UpstreamFailure(result.status_code, result.status_text)
        return result
