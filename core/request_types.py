"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UpstreamResponse:
    """Buffered upstream response."""

    status_code: int
    status_text: str
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299
