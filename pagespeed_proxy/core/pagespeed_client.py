"""
PageSpeed Insights API client.
Issues the single outbound runPagespeed call for an audit.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from pagespeed_proxy.config import PSI_ENDPOINT, PSI_REQUEST_TIMEOUT, PSI_STRATEGY
from pagespeed_proxy.errors import UpstreamError

logger = logging.getLogger(__name__)

# httpx logs full request URLs at INFO, and ours carry the API key
logging.getLogger("httpx").setLevel(logging.WARNING)


def build_params(url: str, api_key: str, strategy: str = PSI_STRATEGY) -> Dict[str, str]:
    """
    Build runPagespeed query parameters.

    Args:
        url: Page to audit.
        api_key: PageSpeed Insights API key.
        strategy: Device profile, "mobile" or "desktop".

    Returns:
        Query parameter mapping.
    """
    return {"url": url, "key": api_key, "strategy": strategy}


async def fetch_pagespeed(
    url: str,
    api_key: str,
    strategy: str = PSI_STRATEGY,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    Run a PageSpeed Insights audit for a URL.

    A single GET with no retries. The API key is sent as a query
    parameter and never logged.

    Args:
        url: Page to audit.
        api_key: PageSpeed Insights API key.
        strategy: Device profile, "mobile" or "desktop".
        transport: Optional httpx transport (used by tests).

    Returns:
        Decoded runPagespeed JSON.

    Raises:
        UpstreamError: If PSI answers with a non-success status.
        httpx.HTTPError: On network failures.
        ValueError: If the body is not valid JSON.
    """
    logger.info(f"Requesting PSI audit ({strategy}) for {url}")

    async with httpx.AsyncClient(
        timeout=PSI_REQUEST_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    ) as client:
        response = await client.get(
            PSI_ENDPOINT, params=build_params(url, api_key, strategy)
        )

    if not response.is_success:
        logger.warning(f"PSI returned {response.status_code} for {url}")
        raise UpstreamError(response.status_code, response.text)

    return response.json()
