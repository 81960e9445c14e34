"""
Pydantic request/response models for the Creative Analysis backend.

This module provides type-safe validation and serialization for the analysis
engine contracts: policy specs, performance items, headline features,
validation results, annotated items, reasons, recommendations and the
analysis response envelope.

Field names follow the camelCase wire contract consumed by the dashboard
frontend (itemId, hasNumeral, specSnapshot, ...).

All models use Pydantic v2 syntax.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer

from creative_analysis.models.enums import Driver, RankKey


def coerce_headline_text(value: Any) -> str:
    """Headline text as a string: None becomes '', other values go through str()."""
    if value is None:
        return ""
    if not isinstance(value, str):
        return str(value)
    return value


# =============================================================================
# Policy Spec Models
# =============================================================================


class HeadlinePolicy(BaseModel):
    """Headline rules of a policy spec."""
    model_config = ConfigDict(frozen=True)

    maxChars: int = Field(..., ge=0, description="Hard headline length limit")
    warnAt: int = Field(..., ge=0, description="Length above which a soft warning is emitted")
    noAllCaps: bool = Field(default=True, description="Whether ALL-CAPS headlines are rejected")
    misleadingClaims: bool = Field(default=False, description="Whether misleading claims are tolerated")


class ImagePolicy(BaseModel):
    """Image rules of a policy spec."""
    model_config = ConfigDict(frozen=True)

    aspect: str = Field(default="16:9", description="Required aspect ratio")
    recommended: str = Field(default="1200x674", description="Recommended pixel size")
    maxSizeMB: float = Field(default=5, gt=0, description="Maximum file size in MB")
    formats: List[str] = Field(
        default_factory=lambda: ["jpg", "jpeg", "png"],
        description="Accepted file formats",
    )


class PolicySpec(BaseModel):
    """
    Versioned creative policy snapshot.

    Identity is the (version, fetchedAt) pair. Instances are frozen; a
    refresh produces a new object rather than mutating a cached one.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "version": "taboola-specs-2025-01",
                "fetchedAt": "2025-01-15T10:00:00+00:00",
                "headline": {"maxChars": 60, "warnAt": 45, "noAllCaps": True, "misleadingClaims": False},
                "image": {"aspect": "16:9", "recommended": "1200x674", "maxSizeMB": 5,
                          "formats": ["jpg", "jpeg", "png"]},
            }
        },
    )

    version: str = Field(..., min_length=1, description="Spec version identifier")
    fetchedAt: str = Field(..., description="ISO-8601 timestamp the snapshot was produced at")
    headline: HeadlinePolicy
    image: ImagePolicy = Field(default_factory=ImagePolicy)


class PolicySpecSnapshot(PolicySpec):
    """Policy spec as served by GET /api/specs."""
    cached: bool = Field(default=False, description="True when served from the spec cache")


class SpecSnapshot(BaseModel):
    """Identity of the spec an analysis was evaluated against."""
    version: str
    fetchedAt: str


# =============================================================================
# Performance Data Models
# =============================================================================


class PerformanceItem(BaseModel):
    """
    One advertised creative for a reporting window.

    ctr and cvr must use the same unit (percent or fraction) across a batch.
    roas and cpa are absent when spend or conversions are zero. Additional
    report fields (campaignId, spend, clicks, ...) are carried through
    untouched.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "itemId": "3912007781",
                "headline": "Over 55? Cut Bills in 3 Steps",
                "ctr": 3.5,
                "cvr": 0.04,
                "roas": 1.5,
                "cpa": 15.0,
            }
        },
    )

    itemId: str = Field(..., min_length=1, description="Item identifier, unique within a window")
    headline: str = Field(default="", description="Creative headline, may be empty")
    ctr: float = Field(default=0.0, ge=0, description="Click-through rate")
    cvr: float = Field(default=0.0, ge=0, description="Conversion rate")
    roas: Optional[float] = Field(default=None, ge=0, description="Return on ad spend")
    cpa: Optional[float] = Field(default=None, ge=0, description="Cost per acquisition")

    @field_validator("itemId", mode="before")
    @classmethod
    def _item_id_as_text(cls, value: Any) -> Any:
        # report rows carry numeric ids
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("headline", mode="before")
    @classmethod
    def _headline_as_text(cls, value: Any) -> str:
        return coerce_headline_text(value)


class CohortMedians(BaseModel):
    """Median CTR/CVR over all items in the same reporting window."""
    ctr: float = Field(default=0.0, description="Median click-through rate")
    cvr: float = Field(default=0.0, description="Median conversion rate")


# =============================================================================
# Headline Analysis Models
# =============================================================================


class HeadlineFeatures(BaseModel):
    """Structured signals derived from a headline string."""
    model_config = ConfigDict(frozen=True)

    length: int = Field(default=0, ge=0)
    hasNumeral: bool = False
    hasCurrency: bool = False
    isQuestion: bool = False
    isAllCaps: bool = False
    hasTimeWord: bool = False
    hasRetailer: bool = False
    toneCuriosity: bool = False
    toneBenefit: bool = False


class ValidationResult(BaseModel):
    """Outcome of checking one headline against one policy spec."""
    ok: bool = Field(..., description="True iff no issues were found")
    issues: List[str] = Field(default_factory=list, description="One message per violated rule")

    @classmethod
    def from_issues(cls, issues: List[str]) -> "ValidationResult":
        return cls(ok=not issues, issues=list(issues))


class Deltas(BaseModel):
    """Signed difference between an item and the cohort medians."""
    ctr: float
    cvr: float


class AnnotatedItem(BaseModel):
    """
    A performance item annotated with features, peer deltas and drivers.

    ctr/cvr and deltas are None only for items whose metrics could not be
    interpreted; such items are still annotated from their headline.
    """
    model_config = ConfigDict(extra="allow")

    itemId: str
    headline: str = ""
    ctr: Optional[float] = None
    cvr: Optional[float] = None
    roas: Optional[float] = None
    cpa: Optional[float] = None
    features: HeadlineFeatures
    deltas: Optional[Deltas] = None
    drivers: List[Driver] = Field(default_factory=list)


class ReasonText(BaseModel):
    short: str = Field(..., min_length=1, description="At most two clauses, never empty")
    detail: str = Field(..., description="All clauses plus the driver suffix")


class Reason(BaseModel):
    itemId: str
    reason: ReasonText


# =============================================================================
# Recommendation Models
# =============================================================================


class Recommendation(BaseModel):
    """
    A validated headline suggestion.

    `from` is serialized only when the headline was templated from an
    existing item rather than taken from the fixed catalog.
    """
    model_config = ConfigDict(populate_by_name=True)

    headline: str
    issues: List[str] = Field(default_factory=list)
    source_item_id: Optional[str] = Field(default=None, alias="from")

    @model_serializer(mode="wrap")
    def _omit_missing_source(self, handler):
        data = handler(self)
        if self.source_item_id is None:
            data.pop("from", None)
            data.pop("source_item_id", None)
        return data


class ImageBrief(BaseModel):
    prompt: str
    why: str


class Recommendations(BaseModel):
    headlines: List[Recommendation] = Field(default_factory=list)
    images: List[ImageBrief] = Field(default_factory=list)


# =============================================================================
# API Envelopes
# =============================================================================


class AnalysisResponse(BaseModel):
    """Payload returned by the analysis engine endpoints."""
    items: List[AnnotatedItem]
    reasons: List[Reason]
    recommendations: Recommendations
    specSnapshot: SpecSnapshot


class AnalysisRequest(BaseModel):
    """
    Body of POST /api/analysis-engine.

    Items are accepted as raw mappings so that a single malformed row is
    annotated with an error reason instead of rejecting the whole request.
    When medians are omitted they are computed from the items.
    """
    items: List[Dict[str, Any]] = Field(default_factory=list)
    medians: Optional[CohortMedians] = None
    rank: Optional[RankKey] = None


class HeadlineCheckRequest(BaseModel):
    headline: str = Field(default="", description="Headline to check")

    @field_validator("headline", mode="before")
    @classmethod
    def _headline_as_text(cls, value: Any) -> str:
        return coerce_headline_text(value)


class HeadlineCheckResponse(BaseModel):
    headline: str
    features: HeadlineFeatures
    validation: ValidationResult
    specSnapshot: SpecSnapshot


class ErrorResponse(BaseModel):
    error: str
