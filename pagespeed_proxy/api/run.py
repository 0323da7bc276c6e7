"""
Audit handler: proxies a PageSpeed Insights run and returns a simplified report.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request

from pagespeed_proxy.api.schemas import AuditSummary, ErrorResponse
from pagespeed_proxy.audit import build_summary
from pagespeed_proxy.config import get_settings
from pagespeed_proxy.core.pagespeed_client import fetch_pagespeed
from pagespeed_proxy.errors import AuditError, InternalError, MissingInput

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    Args:
        request: Incoming request.

    Returns:
        The decoded object, or an empty dict if the body is empty,
        not JSON, or not an object.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post(
    "/run",
    response_model=AuditSummary,
    responses={
        200: {"model": AuditSummary},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def run_audit(request: Request) -> AuditSummary:
    """
    Run a mobile PageSpeed Insights audit for the posted URL.

    1. Validate the body has a non-empty url
    2. Call PSI once (no retries)
    3. Reduce the payload to score, core metrics and graded issues
    """
    body = await read_json_body(request)
    url = body.get("url")
    if not url or not isinstance(url, str):
        raise MissingInput()

    try:
        settings = get_settings()

        data = await fetch_pagespeed(url, settings.psi_key)
        summary = build_summary(data, url)

        logger.info(f"Audit complete for {url}: score={summary.score}")
        return summary

    except AuditError:
        raise
    except Exception as e:
        logger.exception(f"Audit failed for {url}: {e}")
        raise InternalError(str(e))

