"""
PageSpeed audit transform: metrics and issue grading.
"""

from pagespeed_proxy.audit.grading import grade_issues
from pagespeed_proxy.audit.report import build_summary

__all__ = ["build_summary", "grade_issues"]
