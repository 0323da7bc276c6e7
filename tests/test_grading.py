"""Tests for issue grading rules."""

import pytest

from pagespeed_proxy.api.schemas import Grade, PageSpeedResponse
from pagespeed_proxy.audit.grading import (
    grade_audit_score,
    grade_external_hosts,
    grade_issues,
    grade_request_count,
)

from conftest import TARGET_URL, build_payload, network_items


def issues_by_key(data, target_url: str = TARGET_URL):
    payload = PageSpeedResponse.model_validate(data)
    return {issue.key: issue for issue in grade_issues(payload, target_url)}


class TestLadders:
    """Tests for the grade thresholds."""

    @pytest.mark.parametrize(
        "count,grade",
        [(None, Grade.B), (0, Grade.B), (40, Grade.B), (41, Grade.C), (60, Grade.C),
         (61, Grade.D), (90, Grade.D), (91, Grade.F)],
    )
    def test_request_count(self, count, grade) -> None:
        assert grade_request_count(count) == grade

    @pytest.mark.parametrize(
        "score,grade",
        [(1.0, Grade.A), (0.9, Grade.A), (0.89, Grade.B), (0.7, Grade.B),
         (0.69, Grade.C), (0.4, Grade.C), (0.39, Grade.D), (0.0, Grade.D)],
    )
    def test_audit_score(self, score, grade) -> None:
        assert grade_audit_score(score) == grade

    @pytest.mark.parametrize(
        "count,grade",
        [(0, Grade.A), (2, Grade.A), (3, Grade.B), (4, Grade.B), (5, Grade.C),
         (6, Grade.C), (7, Grade.D)],
    )
    def test_external_hosts(self, count, grade) -> None:
        assert grade_external_hosts(count) == grade


class TestGradeIssues:
    """Tests for the full issue list."""

    def test_emits_one_issue_per_rule_in_order(self) -> None:
        payload = PageSpeedResponse.model_validate(build_payload())
        keys = [issue.key for issue in grade_issues(payload, TARGET_URL)]
        assert keys == ["http_requests", "expires_headers", "gzip", "dns", "cookies", "empty_src"]

    def test_every_issue_has_a_tip(self) -> None:
        for issue in issues_by_key(build_payload()).values():
            assert issue.tip

    def test_same_host_requests(self) -> None:
        urls = [f"https://pinedesignmarketing.com/img/{i}.png" for i in range(45)]
        issues = issues_by_key(build_payload(audits={"network-requests": network_items(urls)}))
        assert issues["http_requests"].grade == Grade.C
        assert issues["dns"].grade == Grade.A

    def test_no_network_audit(self) -> None:
        issues = issues_by_key(build_payload())
        assert issues["http_requests"].grade == Grade.B
        assert issues["dns"].grade == Grade.A

    def test_many_external_hosts(self) -> None:
        urls = [f"https://cdn{i}.example.net/x.js" for i in range(7)]
        issues = issues_by_key(build_payload(audits={"network-requests": network_items(urls)}))
        assert issues["dns"].grade == Grade.D

    def test_cache_score(self) -> None:
        issues = issues_by_key(build_payload(audits={"uses-long-cache-ttl": {"score": 0.95}}))
        assert issues["expires_headers"].grade == Grade.A

    def test_missing_scores_default_to_c(self) -> None:
        issues = issues_by_key(build_payload(audits={"uses-text-compression": {"score": None}}))
        assert issues["expires_headers"].grade == Grade.C
        assert issues["gzip"].grade == Grade.C

    def test_compression_score(self) -> None:
        issues = issues_by_key(build_payload(audits={"uses-text-compression": {"score": 0.2}}))
        assert issues["gzip"].grade == Grade.D
        assert issues["gzip"].label == "Compress components with gzip/brotli"

    def test_static_advisories(self) -> None:
        issues = issues_by_key(build_payload())
        assert issues["cookies"].grade == Grade.B
        assert issues["empty_src"].grade == Grade.A
