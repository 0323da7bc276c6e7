"""
Pydantic models for request/response validation.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Upstream numbers keep their JSON type, so 180 stays 180 rather than 180.0
Number = Union[int, float]


# ============================================
# PageSpeed Insights payload
# ============================================

class PayloadModel(BaseModel):
    """Base for upstream models; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class AuditDetails(PayloadModel):
    """Details block of a Lighthouse audit."""

    items: Optional[List[Any]] = None

    @field_validator("items", mode="before")
    @classmethod
    def _items_must_be_list(cls, value: Any) -> Optional[List[Any]]:
        # Some audit detail types carry no item list at all
        return value if isinstance(value, list) else None


class LighthouseAudit(PayloadModel):
    """A single named Lighthouse audit."""

    score: Optional[float] = None
    numeric_value: Optional[Number] = Field(default=None, alias="numericValue")
    details: Optional[AuditDetails] = None


class LighthouseCategory(PayloadModel):
    """A Lighthouse category such as performance."""

    score: Optional[float] = None


class LighthouseResult(PayloadModel):
    """The lighthouseResult section of a PSI response."""

    categories: Dict[str, Optional[LighthouseCategory]] = {}
    audits: Dict[str, Optional[LighthouseAudit]] = {}

    @field_validator("categories", "audits", mode="before")
    @classmethod
    def _null_means_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class PageSpeedResponse(PayloadModel):
    """Top-level runPagespeed response."""

    lighthouse_result: LighthouseResult = Field(
        default_factory=LighthouseResult, alias="lighthouseResult"
    )

    @field_validator("lighthouse_result", mode="before")
    @classmethod
    def _null_result_means_empty(cls, value: Any) -> Any:
        return {} if value is None else value


# ============================================
# Audit summary models
# ============================================

class Grade(str, Enum):
    """Letter grade for an issue."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Issue(BaseModel):
    """Graded advisory shown by the front-end."""
    key: str
    label: str
    grade: Grade
    tip: Optional[str] = None


class AuditSummary(BaseModel):
    """Simplified performance report returned to the client."""

    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0, le=100)
    lcp: Optional[Number] = None
    cls: Optional[Number] = None
    inp: Optional[Number] = None
    requests: Optional[int] = None
    page_size_mb: Optional[Number] = Field(default=None, alias="pageSizeMB")
    load_time_s: Optional[Number] = Field(default=None, alias="loadTimeS")
    issues: List[Issue] = []


# ============================================
# Request / response envelopes
# ============================================

class AuditRequest(BaseModel):
    """Body of POST /api/run."""

    url: str = Field(min_length=1)


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
