"""
FastAPI application entry point.
PageSpeed Proxy - simplified PageSpeed Insights reports for the front-end.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from pagespeed_proxy import __version__
from pagespeed_proxy.api.cors import OriginGateMiddleware
from pagespeed_proxy.api.run import router as run_router
from pagespeed_proxy.api.schemas import ErrorResponse, HealthResponse
from pagespeed_proxy.errors import AuditError, InvalidMethod

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def audit_error_handler(request: Request, exc: AuditError) -> JSONResponse:
    """Render an AuditError as an ErrorResponse body."""
    body = ErrorResponse(error=exc.error, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Answer every unsupported method with the InvalidMethod body."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)

    logger.info(f"Rejected {request.method} {request.url.path}")
    response = await audit_error_handler(request, InvalidMethod())
    response.headers.update(exc.headers or {})
    return response


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Returns:
        App with the CORS gate, error handler and audit routes wired up.
    """
    app = FastAPI(
        title="PageSpeed Proxy",
        description="Simplified PageSpeed Insights reports for pinedesignmarketing.com",
        version=__version__,
    )

    # Add CORS gate
    app.add_middleware(OriginGateMiddleware)

    app.add_exception_handler(AuditError, audit_error_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    # Include routers
    app.include_router(run_router, prefix="/api", tags=["audit"])

    @app.get("/", response_model=HealthResponse, tags=["health"])
    async def root():
        """Root endpoint - health check."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    logger.info("PageSpeed Proxy ready")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
