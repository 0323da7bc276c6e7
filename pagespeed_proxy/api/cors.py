"""
CORS gate for the front-end site.

Allowed origins are echoed back; any other origin still gets a response,
just without Access-Control-Allow-Origin. Preflight requests are answered
here and never reach the routes.
"""

from collections.abc import Callable
from typing import Dict, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pagespeed_proxy.config import ALLOWED_HEADERS, ALLOWED_METHODS, ALLOWED_ORIGINS


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    """
    Build CORS headers for a request origin.

    Args:
        origin: Value of the Origin request header, if any.

    Returns:
        Headers to set on the response.
    """
    headers = {
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
    if origin and origin in ALLOWED_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


class OriginGateMiddleware(BaseHTTPMiddleware):
    """Applies CORS headers to every response and short-circuits OPTIONS."""

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        headers = cors_headers(request.headers.get("origin"))

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
