"""Shared test fixtures for the PageSpeed Proxy test suite."""

from collections.abc import Callable, Generator
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from pagespeed_proxy.config import get_settings
from pagespeed_proxy.main import app

TARGET_URL = "https://pinedesignmarketing.com/"
ALLOWED_ORIGIN = "https://pinedesignmarketing.com"
TEST_API_KEY = "test-psi-key"


def build_payload(
    performance: Optional[float] = 0.85,
    audits: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a minimal runPagespeed response."""
    categories = {} if performance is None else {"performance": {"score": performance}}
    return {
        "lighthouseResult": {
            "categories": categories,
            "audits": audits or {},
        }
    }


def network_items(urls: List[Any]) -> Dict[str, Any]:
    """Build a network-requests audit with one item per url."""
    return {"details": {"type": "table", "items": [{"url": u} for u in urls]}}


@pytest.fixture
def payload_factory() -> Callable[..., Dict[str, Any]]:
    """Factory fixture for synthetic PSI payloads."""
    return build_payload


@pytest.fixture
def full_payload() -> Dict[str, Any]:
    """A payload with every audit the summary reads."""
    return build_payload(
        performance=0.85,
        audits={
            "largest-contentful-paint": {"numericValue": 2500},
            "cumulative-layout-shift": {"numericValue": 0.12},
            "experimental-interaction-to-next-paint": {"numericValue": 180},
            "max-potential-fid": {"numericValue": 300},
            "network-requests": network_items(
                [f"https://pinedesignmarketing.com/asset-{i}.js" for i in range(45)]
            ),
            "total-byte-weight": {"numericValue": 2 * 1024 * 1024},
            "speed-index": {"numericValue": 3400},
            "interactive": {"numericValue": 5100},
            "uses-long-cache-ttl": {"score": 0.95},
            "uses-text-compression": {"score": 0.5},
        },
    )


@pytest.fixture(autouse=True)
def psi_key(monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """Provide PSI_KEY and reset cached settings around each test."""
    monkeypatch.setenv("PSI_KEY", TEST_API_KEY)
    get_settings.cache_clear()
    yield TEST_API_KEY
    get_settings.cache_clear()


@pytest.fixture
def client() -> TestClient:
    """Test client for the FastAPI app."""
    return TestClient(app)
