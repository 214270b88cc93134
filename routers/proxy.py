# routers/proxy.py

"""
Raw pass-through to the spreadsheet web app for local SPA development.
Mounted only when PROXY_ENABLED is set; no auth, no region scoping.
"""

import requests
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from core.config import settings
from core.logging_config import logger


router = APIRouter(tags=["Proxy (Dev Only)"])


def _relay(response: requests.Response) -> JSONResponse:
    try:
        content = response.json()
    except ValueError:
        content = {"error": "Upstream returned a non-JSON response", "status": response.status_code}
    return JSONResponse(status_code=response.status_code, content=content)


@router.api_route("/api", methods=["GET", "POST"], include_in_schema=False)
async def proxy(request: Request):
    if not settings.SHEETS_API_URL:
        return JSONResponse(status_code=503, content={"error": "SHEETS_API_URL is not configured"})

    body = None
    if request.method == "POST":
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Request body must be JSON"})

    try:
        response = await run_in_threadpool(
            requests.request,
            request.method,
            settings.SHEETS_API_URL,
            params=dict(request.query_params),
            json=body,
            timeout=settings.SHEETS_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"Proxy error: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    if response.status_code >= 400:
        logger.error(f"Proxy error: {response.status_code} {response.text[:200]}")
    return _relay(response)
