"""Audit endpoint for Vercel (serves POST/OPTIONS /api/run)."""

from pagespeed_proxy.main import app

__all__ = ["app"]
