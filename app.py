"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from api.handlers import handle_legacy_redirect, handle_proxy
from core.config import Config
from core.protocols import RequestLogger
from services.proxy_service import ProxyService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` replaces the outbound network layer (used by tests).
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            transport=transport,
        )
        upstream = UpstreamClient(client, config.upstream)
        app.state.proxy_service = ProxyService(upstream, config.rewrite)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Search Proxy", version="0.1.0", lifespan=lifespan)
    public_dir = config.static.public_dir

    @app.get("/url")
    async def legacy_redirect(request: Request):
        return await handle_legacy_redirect(request, logger)

    @app.get("/")
    async def homepage():
        return FileResponse(public_dir / "index.html")

    @app.get("/proxy")
    async def proxy(request: Request):
        return await handle_proxy(request, logger)

    # Catch-all mount, must stay after the routes above
    app.mount("/", StaticFiles(directory=public_dir), name="static")

    return app
