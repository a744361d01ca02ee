"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from core.exceptions import InvalidInput, TransportFailure, UpstreamFailure
from core.params import first_param, is_absolute_url, proxy_path
from core.protocols import RequestLogger
from services.proxy_service import ProxyService

FETCH_ERROR_MESSAGE = "Error fetching the URL"


async def handle_legacy_redirect(request: Request, logger: RequestLogger) -> Response:
    """Forward /url?q=... or /url?url=... to the proxy route."""
    params = request.query_params
    destination = first_param(params)
    valid = is_absolute_url(destination)
    logger.log_redirect(str(params), destination if valid else None)

    if not valid:
        return PlainTextResponse("Missing or invalid destination URL", status_code=400)
    return RedirectResponse(proxy_path(destination), status_code=302)


async def handle_proxy(request: Request, logger: RequestLogger) -> Response:
    """Handle /proxy: fetch the target, rewrite search links, return the body."""
    url = request.query_params.get("url")
    service: ProxyService = request.app.state.proxy_service

    try:
        page = await service.fetch_page(url)
    except InvalidInput as e:
        return PlainTextResponse(str(e), status_code=400)
    except UpstreamFailure as e:
        logger.log_error(url, e.status_code, f"Error fetching URL: {e}")
        return PlainTextResponse(e.status_text, status_code=e.status_code)
    except TransportFailure as e:
        logger.log_error(url, 500, f"Error during proxy request: {e}")
        return PlainTextResponse(FETCH_ERROR_MESSAGE, status_code=500)

    logger.log_proxy(page.url, 200, rewritten=page.rewritten)
    return HTMLResponse(page.body)
