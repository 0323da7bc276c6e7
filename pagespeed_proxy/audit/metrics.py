"""
Metric accessors for PageSpeed Insights payloads.

Every accessor is a pure function of the parsed payload and returns None
when the underlying audit or value is absent.
"""

import math
from typing import Any, List, Optional, Set
from urllib.parse import urlsplit

from pagespeed_proxy.api.schemas import LighthouseAudit, Number, PageSpeedResponse
from pagespeed_proxy.config import BYTES_PER_MB, MS_PER_SECOND

# Lighthouse audit ids
LCP_AUDIT = "largest-contentful-paint"
CLS_AUDIT = "cumulative-layout-shift"
INP_AUDIT = "experimental-interaction-to-next-paint"
MAX_FID_AUDIT = "max-potential-fid"
NETWORK_REQUESTS_AUDIT = "network-requests"
BYTE_WEIGHT_AUDIT = "total-byte-weight"
SPEED_INDEX_AUDIT = "speed-index"
INTERACTIVE_AUDIT = "interactive"
CACHE_TTL_AUDIT = "uses-long-cache-ttl"
TEXT_COMPRESSION_AUDIT = "uses-text-compression"

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def get_audit(payload: PageSpeedResponse, name: str) -> Optional[LighthouseAudit]:
    """Look up a named audit."""
    return payload.lighthouse_result.audits.get(name)


def audit_numeric_value(payload: PageSpeedResponse, name: str) -> Optional[Number]:
    """numericValue of the named audit, if any."""
    audit = get_audit(payload, name)
    return audit.numeric_value if audit is not None else None


def audit_score(payload: PageSpeedResponse, name: str) -> Optional[float]:
    """Sub-score (0..1) of the named audit, if any."""
    audit = get_audit(payload, name)
    return audit.score if audit is not None else None


def _ms_to_seconds(value: Optional[Number]) -> Optional[float]:
    return value / MS_PER_SECOND if value is not None else None


def performance_score(payload: PageSpeedResponse) -> int:
    """
    Performance category score scaled to 0-100.

    Halves round up, so 0.125 gives 13. A missing score counts as 0.
    """
    category = payload.lighthouse_result.categories.get("performance")
    score = category.score if category is not None else None
    if score is None:
        return 0
    return int(math.floor(score * 100 + 0.5))


def largest_contentful_paint(payload: PageSpeedResponse) -> Optional[float]:
    """LCP in seconds."""
    return _ms_to_seconds(audit_numeric_value(payload, LCP_AUDIT))


def cumulative_layout_shift(payload: PageSpeedResponse) -> Optional[Number]:
    """CLS, unitless."""
    return audit_numeric_value(payload, CLS_AUDIT)


def interaction_to_next_paint(payload: PageSpeedResponse) -> Optional[Number]:
    """INP in milliseconds, falling back to max potential FID."""
    inp = audit_numeric_value(payload, INP_AUDIT)
    if inp is None:
        inp = audit_numeric_value(payload, MAX_FID_AUDIT)
    return inp


def network_request_items(payload: PageSpeedResponse) -> Optional[List[Any]]:
    """Items of the network-requests audit, or None if not reported."""
    audit = get_audit(payload, NETWORK_REQUESTS_AUDIT)
    if audit is None or audit.details is None:
        return None
    return audit.details.items


def request_count(payload: PageSpeedResponse) -> Optional[int]:
    """Number of network requests made by the page."""
    items = network_request_items(payload)
    return len(items) if items is not None else None


def page_size_mb(payload: PageSpeedResponse) -> Optional[float]:
    """Total byte weight in MiB; None when absent or zero."""
    total_bytes = audit_numeric_value(payload, BYTE_WEIGHT_AUDIT)
    if not total_bytes:
        return None
    return total_bytes / BYTES_PER_MB


def load_time_seconds(payload: PageSpeedResponse) -> Optional[float]:
    """Speed index in seconds, falling back to time to interactive."""
    speed_index = audit_numeric_value(payload, SPEED_INDEX_AUDIT)
    if speed_index is not None:
        return _ms_to_seconds(speed_index)
    return _ms_to_seconds(audit_numeric_value(payload, INTERACTIVE_AUDIT))


def url_host(url: Any, require_host: bool = True) -> str:
    """
    Host of an absolute URL, including a non-default port.

    Args:
        url: URL to parse.
        require_host: Reject URLs without a host (the audited page). When
            False, hostless URLs such as data: or about:blank give "".

    Returns:
        Lower-cased host, e.g. "cdn.example.com" or "example.com:8080".

    Raises:
        ValueError: If url is not a string, has no scheme, has a bad port,
            or has no host while require_host is set.
    """
    if not isinstance(url, str):
        raise ValueError(f"Not a URL: {url!r}")

    parts = urlsplit(url.strip())
    if not parts.scheme:
        raise ValueError(f"Not an absolute URL: {url!r}")
    if not parts.hostname:
        if require_host:
            raise ValueError(f"URL has no host: {url!r}")
        return ""

    host = parts.hostname
    port = parts.port  # raises ValueError on a bad port
    if port is not None and port != DEFAULT_PORTS.get(parts.scheme.lower()):
        host = f"{host}:{port}"
    return host


def count_external_hosts(payload: PageSpeedResponse, target_url: str) -> int:
    """
    Count distinct hosts, other than the target's own, among network requests.

    Items whose url is missing or fails to parse are skipped; they never
    fail the audit. Hostless URLs (data:, about:blank) share the empty host,
    which counts as one external host.

    Args:
        payload: Parsed PSI response.
        target_url: URL that was audited.

    Returns:
        Number of distinct external hosts.

    Raises:
        ValueError: If target_url itself cannot be parsed.
    """
    origin_host = url_host(target_url)

    hosts: Set[str] = set()
    for item in network_request_items(payload) or []:
        item_url = item.get("url") if isinstance(item, dict) else None
        try:
            hosts.add(url_host(item_url, require_host=False))
        except ValueError:
            continue

    hosts.discard(origin_host)
    return len(hosts)
