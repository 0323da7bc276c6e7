"""
Builds the AuditSummary returned to the front-end from a raw PSI response.
"""

import logging
from typing import Any, Dict

from pagespeed_proxy.api.schemas import AuditSummary, PageSpeedResponse
from pagespeed_proxy.audit.grading import grade_issues
from pagespeed_proxy.audit.metrics import (
    cumulative_layout_shift,
    interaction_to_next_paint,
    largest_contentful_paint,
    load_time_seconds,
    page_size_mb,
    performance_score,
    request_count,
)

logger = logging.getLogger(__name__)


def parse_payload(data: Dict[str, Any]) -> PageSpeedResponse:
    """Validate raw PSI JSON against the optional-field schema."""
    return PageSpeedResponse.model_validate(data)


def build_summary(data: Dict[str, Any], target_url: str) -> AuditSummary:
    """
    Transform a PageSpeed Insights response into an AuditSummary.

    Pure and deterministic: the same payload and URL always produce
    the same summary.

    Args:
        data: Decoded runPagespeed JSON.
        target_url: URL that was audited.

    Returns:
        AuditSummary with core metrics and graded issues.

    Raises:
        pydantic.ValidationError: If the payload has the wrong shape.
        ValueError: If target_url cannot be parsed.
    """
    payload = parse_payload(data)

    summary = AuditSummary(
        score=performance_score(payload),
        lcp=largest_contentful_paint(payload),
        cls=cumulative_layout_shift(payload),
        inp=interaction_to_next_paint(payload),
        requests=request_count(payload),
        page_size_mb=page_size_mb(payload),
        load_time_s=load_time_seconds(payload),
        issues=grade_issues(payload, target_url),
    )

    logger.debug(f"Built summary for {target_url}: score={summary.score}")
    return summary
