#!/usr/bin/env python3
"""
Run PageSpeed audits from the command line.
Prints the same summary JSON the /api/run endpoint returns.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from pagespeed_proxy.audit import build_summary
from pagespeed_proxy.config import get_settings
from pagespeed_proxy.core.pagespeed_client import fetch_pagespeed
from pagespeed_proxy.errors import UpstreamError

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def audit_url(url: str, api_key: str) -> dict:
    """
    Audit a single URL.

    Args:
        url: Page to audit.
        api_key: PageSpeed Insights API key.

    Returns:
        Summary as a JSON-ready dict.
    """
    data = await fetch_pagespeed(url, api_key)
    summary = build_summary(data, url)
    return summary.model_dump(mode="json", by_alias=True)


async def run(urls: list) -> int:
    """Audit each URL in turn and return the number of failures."""
    api_key = get_settings().psi_key
    failures = 0

    for url in urls:
        logger.info(f"Auditing {url}...")
        try:
            result = await audit_url(url, api_key)
            print(json.dumps({"url": url, **result}, indent=2))
        except UpstreamError as e:
            logger.error(f"PSI returned {e.status_code} for {url}: {e.detail}")
            failures += 1
        except Exception as e:
            logger.error(f"Error auditing {url}: {e}")
            failures += 1

    return failures


def main():
    """Main function to audit URLs given on the command line."""
    urls = sys.argv[1:]
    if not urls:
        logger.error("Usage: run_audit.py <url> [<url> ...]")
        sys.exit(2)

    failures = asyncio.run(run(urls))

    logger.info("=" * 60)
    logger.info(f"Audited {len(urls) - failures}/{len(urls)} URL(s)")
    logger.info("=" * 60)

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error(f"Fatal Error: {e}")
        sys.exit(1)
