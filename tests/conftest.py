"""Shared fixtures: an app wired to a fake upstream and a recording logger."""

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


class RecordingLogger:
    """RequestLogger that keeps every call in memory."""

    def __init__(self) -> None:
        self.proxied: list[tuple[str, int, bool]] = []
        self.redirects: list[tuple[str, str | None]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_proxy(self, url: str, status: int, *, rewritten: bool) -> None:
        self.proxied.append((url, status, rewritten))

    def log_redirect(self, query: str, destination: str | None) -> None:
        self.redirects.append((query, destination))

    def log_error(self, url: str, status: int, message: str) -> None:
        self.errors.append((url, status, message))


class FakeUpstream:
    """Mock transport handler that records outbound requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: UpstreamHandler = lambda request: httpx.Response(200, text="")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond(self, status_code: int = 200, text: str = "", **kwargs) -> None:
        self.handler = lambda request: httpx.Response(status_code, text=text, **kwargs)

    def fail(self, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = handler


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def request_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(config, request_logger, upstream) -> Iterator[TestClient]:
    app = create_app(config, request_logger, transport=httpx.MockTransport(upstream))
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
