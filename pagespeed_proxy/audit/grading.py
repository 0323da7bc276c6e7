"""
Issue grading rules.

Each rule inspects the parsed payload and returns exactly one Issue.
The front-end renders issues in the order of GRADING_RULES.
"""

from typing import Callable, Dict, List, Optional

from pagespeed_proxy.api.schemas import Grade, Issue, PageSpeedResponse
from pagespeed_proxy.audit.metrics import (
    CACHE_TTL_AUDIT,
    TEXT_COMPRESSION_AUDIT,
    audit_score,
    count_external_hosts,
    request_count,
)

HTTP_REQUESTS_LABEL = "Make fewer HTTP requests"
EXPIRES_HEADERS_LABEL = "Add Expires headers"
GZIP_LABEL = "Compress components with gzip/brotli"
DNS_LABEL = "Reduce DNS lookups"
COOKIES_LABEL = "Use cookie-free domains for static assets"
EMPTY_SRC_LABEL = "Avoid empty src or href"

HTTP_REQUESTS_TIPS = {
    Grade.F: "Concatenate or defer non-critical scripts; lazy-load below-the-fold assets.",
    Grade.D: "Combine CSS/JS where possible and remove unused libraries.",
    Grade.C: "Audit plugins and third-party tags.",
    Grade.B: "Request count is reasonable; keep bundling and lazy-loading in place.",
}

EXPIRES_HEADERS_TIPS = {
    Grade.A: "Static assets already use long cache lifetimes.",
    Grade.B: "Increase cache TTL on images, fonts and compiled assets.",
    Grade.C: "Set Cache-Control/ETag on static assets.",
    Grade.D: "Enable long-term caching via CDN or server rules.",
}
EXPIRES_HEADERS_MISSING_TIP = "Serve static assets with far-future cache and versioned filenames."

GZIP_TIPS = {
    Grade.A: "Text assets are already served compressed.",
    Grade.B: "Ensure brotli is enabled for text assets.",
    Grade.C: "Compress HTML/CSS/JS; avoid uncompressed bundles.",
    Grade.D: "Enable compression at origin/CDN and re-deploy.",
}
GZIP_MISSING_TIP = "Turn on gzip/brotli at hosting/CDN level."

DNS_TIPS = {
    Grade.D: "Consolidate third-party tags and use fewer external hosts.",
    Grade.C: "Self-host fonts/critical assets; defer non-critical tags.",
    Grade.B: "Prefer CDN subdomains you already use.",
    Grade.A: "Few external hosts; keep new third-party tags in check.",
}

COOKIES_TIP = "Serve images/static assets from a cookieless subdomain or CDN."
EMPTY_SRC_TIP = "Scan templates for empty attributes that trigger extra requests."


def grade_request_count(count: Optional[int]) -> Grade:
    """Grade the number of HTTP requests; an unknown count grades B."""
    if count is not None and count > 90:
        return Grade.F
    if count is not None and count > 60:
        return Grade.D
    if count is not None and count > 40:
        return Grade.C
    return Grade.B


def grade_audit_score(score: float) -> Grade:
    """Threshold ladder shared by the cache and compression audits."""
    if score >= 0.9:
        return Grade.A
    if score >= 0.7:
        return Grade.B
    if score >= 0.4:
        return Grade.C
    return Grade.D


def grade_external_hosts(count: int) -> Grade:
    """Grade the number of distinct external hosts."""
    if count > 6:
        return Grade.D
    if count > 4:
        return Grade.C
    if count > 2:
        return Grade.B
    return Grade.A


def _scored_issue(
    key: str, label: str, score: Optional[float], tips: Dict[Grade, str], missing_tip: str
) -> Issue:
    if score is None:
        return Issue(key=key, label=label, grade=Grade.C, tip=missing_tip)
    grade = grade_audit_score(score)
    return Issue(key=key, label=label, grade=grade, tip=tips[grade])


def http_requests_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    grade = grade_request_count(request_count(payload))
    return Issue(
        key="http_requests",
        label=HTTP_REQUESTS_LABEL,
        grade=grade,
        tip=HTTP_REQUESTS_TIPS[grade],
    )


def expires_headers_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    return _scored_issue(
        "expires_headers",
        EXPIRES_HEADERS_LABEL,
        audit_score(payload, CACHE_TTL_AUDIT),
        EXPIRES_HEADERS_TIPS,
        EXPIRES_HEADERS_MISSING_TIP,
    )


def gzip_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    return _scored_issue(
        "gzip",
        GZIP_LABEL,
        audit_score(payload, TEXT_COMPRESSION_AUDIT),
        GZIP_TIPS,
        GZIP_MISSING_TIP,
    )


def dns_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    grade = grade_external_hosts(count_external_hosts(payload, target_url))
    return Issue(key="dns", label=DNS_LABEL, grade=grade, tip=DNS_TIPS[grade])


def cookies_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    # Static advisory, not derived from the payload
    return Issue(key="cookies", label=COOKIES_LABEL, grade=Grade.B, tip=COOKIES_TIP)


def empty_src_issue(payload: PageSpeedResponse, target_url: str) -> Issue:
    # Static advisory, not derived from the payload
    return Issue(key="empty_src", label=EMPTY_SRC_LABEL, grade=Grade.A, tip=EMPTY_SRC_TIP)


GradingRule = Callable[[PageSpeedResponse, str], Issue]

GRADING_RULES: List[GradingRule] = [
    http_requests_issue,
    expires_headers_issue,
    gzip_issue,
    dns_issue,
    cookies_issue,
    empty_src_issue,
]


def grade_issues(payload: PageSpeedResponse, target_url: str) -> List[Issue]:
    """
    Run every grading rule in order.

    Args:
        payload: Parsed PSI response.
        target_url: URL that was audited, used to tell external hosts apart.

    Returns:
        One Issue per rule.
    """
    return [rule(payload, target_url) for rule in GRADING_RULES]
