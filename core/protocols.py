"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_proxy(self, url: str, status: int, *, rewritten: bool) -> None: ...
    def log_redirect(self, query: str, destination: str | None) -> None: ...
    def log_error(self, url: str, status: int, message: str) -> None: ...
