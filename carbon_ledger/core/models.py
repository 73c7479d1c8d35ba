"""
Pydantic models for the compliance ledger snapshot and the derived results.

Ledger entries and verification records arrive from the store as read-only
snapshots. Optional numeric fields coming from low-quality extractions are
coerced to None instead of failing validation, so the engines only ever see
"present and usable" or "absent". Store rows carry explicit nulls, so a null
in a defaulted column falls back to its default.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    NEEDS_REVIEW = "needs_review"
    REJECTED = "rejected"


class Region(str, Enum):
    INDIA = "india"
    GLOBAL = "global"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class GstinReason(str, Enum):
    MATCHED = "matched"
    GSTIN_MISMATCH = "gstin_mismatch"
    NO_INVOICE_GSTIN = "no_invoice_gstin"
    NO_PROFILE_GSTIN = "no_profile_gstin"
    FREE_MODE = "free_mode"


class GovFormat(str, Enum):
    GCP = "GCP"
    BRSR = "BRSR"
    CCTS = "CCTS"


# ─── Coercion helpers ────────────────────────────────────────────────


def coerce_float(value: Any) -> Optional[float]:
    """Return a finite float, or None for anything absent or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_unit_score(value: Any) -> Optional[float]:
    """Scores live in [0, 1]; anything outside that range counts as absent."""
    number = coerce_float(value)
    if number is None or number < 0.0 or number > 1.0:
        return None
    return number


def coerce_text(value: Any) -> Optional[str]:
    """Text stays text, numbers become text, anything else counts as absent."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return None


# ─── Text defaults ───────────────────────────────────────────────────

DEFAULT_METHODOLOGY = "BIOCOG_MVR_INDIA_v1.0"

# Defaults applied when the store sends null for a required text column
TEXT_DEFAULTS = {
    "currency": "INR",
    "validation_result": "passed",
    "methodology_version": DEFAULT_METHODOLOGY,
}


# ─── Snapshot records ────────────────────────────────────────────────


class LedgerEntry(BaseModel):
    """One classified emission line derived from a source document."""

    document_hash: str = Field(..., min_length=1, description="Content hash of the source document")

    invoice_number: Optional[str] = None
    vendor: Optional[str] = None
    invoice_date: Optional[str] = Field(None, description="Invoice date as extracted (YYYY-MM-DD)")
    amount: Optional[float] = None
    currency: str = "INR"

    green_category: Optional[str] = None
    hsn_code: Optional[str] = None
    gstin: Optional[str] = None

    scope: int = Field(..., ge=1, le=3, description="GHG Protocol scope (1, 2 or 3)")
    emission_category: str = Field(..., description="Emission category, e.g. fuel or electricity")
    activity_data: Optional[float] = None
    activity_unit: Optional[str] = None
    emission_factor: Optional[float] = None
    factor_source: Optional[str] = None
    co2_kg: float = Field(..., ge=0, description="Computed emissions in kg CO2e")

    is_green_benefit: bool = False
    confidence_score: Optional[float] = None
    verification_score: Optional[float] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING
    validation_result: str = "passed"
    validation_failure_reason: Optional[str] = None
    greenwashing_risk: Optional[str] = None
    methodology_version: str = DEFAULT_METHODOLOGY
    classification_method: Optional[str] = None

    created_at: datetime
    verified_at: Optional[datetime] = None
    fiscal_year: Optional[str] = None
    fiscal_quarter: Optional[str] = None

    @field_validator("amount", "activity_data", "emission_factor", mode="before")
    @classmethod
    def _optional_number(cls, v: Any) -> Optional[float]:
        return coerce_float(v)

    @field_validator("confidence_score", "verification_score", mode="before")
    @classmethod
    def _optional_score(cls, v: Any) -> Optional[float]:
        return coerce_unit_score(v)

    @field_validator("invoice_date", mode="before")
    @classmethod
    def _date_as_text(cls, v: Any) -> Optional[str]:
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v if isinstance(v, str) else None

    @field_validator(
        "invoice_number", "vendor", "green_category", "hsn_code", "gstin",
        "activity_unit", "factor_source", "validation_failure_reason",
        "greenwashing_risk", "classification_method", "fiscal_year", "fiscal_quarter",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @field_validator("currency", "validation_result", "methodology_version", mode="before")
    @classmethod
    def _null_takes_default(cls, v: Any, info: ValidationInfo) -> str:
        text = coerce_text(v)
        if text is None or not text.strip():
            return TEXT_DEFAULTS[info.field_name]
        return text

    @field_validator("verification_status", mode="before")
    @classmethod
    def _null_status_is_pending(cls, v: Any) -> Any:
        return VerificationStatus.PENDING if v is None else v

    @field_validator("is_green_benefit", mode="before")
    @classmethod
    def _only_true_is_green(cls, v: Any) -> bool:
        return v is True

    model_config = {"frozen": True, "extra": "ignore"}


class VerificationRecord(BaseModel):
    """Per-submission verification outcome, owned by the verification workflow."""

    status: VerificationStatus = VerificationStatus.PENDING
    total_co2_kg: float = 0.0
    verification_score: Optional[float] = None
    created_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _null_status_is_pending(cls, v: Any) -> Any:
        return VerificationStatus.PENDING if v is None else v

    @field_validator("verification_score", mode="before")
    @classmethod
    def _optional_score(cls, v: Any) -> Optional[float]:
        return coerce_unit_score(v)

    @field_validator("total_co2_kg", mode="before")
    @classmethod
    def _total(cls, v: Any) -> float:
        number = coerce_float(v)
        return number if number is not None else 0.0

    model_config = {"frozen": True, "extra": "ignore"}


# ─── Derived results ─────────────────────────────────────────────────


class ComplianceLabel(BaseModel):
    framework: str
    label: str
    region: Region

    model_config = {"frozen": True}


class CredibilityBreakdown(BaseModel):
    verification_avg: int = Field(0, ge=0, le=100, alias="verificationAvg")
    green_ratio: int = Field(0, ge=0, le=100, alias="greenRatio")
    data_completeness: int = Field(0, ge=0, le=100, alias="dataCompleteness")
    history_depth: int = Field(0, ge=0, le=100, alias="historyDepth")

    model_config = {"populate_by_name": True}


class CredibilityResult(BaseModel):
    score: int = Field(ge=0, le=100)
    grade: Grade
    breakdown: CredibilityBreakdown


class GstinValidationResult(BaseModel):
    valid: bool
    reason: GstinReason
    message: str


class ClassifiedEntry(BaseModel):
    document_hash: str
    invoice_number: Optional[str] = None
    scope: int
    emission_category: str
    co2_kg: float
    labels: list[ComplianceLabel]


class ScopeTotal(BaseModel):
    scope: int
    co2_kg: float
    entry_count: int
    labels: list[ComplianceLabel]


class FiscalTotal(BaseModel):
    fiscal_year: str
    fiscal_quarter: str
    co2_kg: float
    entry_count: int


class LedgerReport(BaseModel):
    """Complete derived view of one ledger snapshot."""

    entry_count: int
    total_co2_kg: float
    credibility: CredibilityResult
    entries: list[ClassifiedEntry]
    scope_totals: list[ScopeTotal]
    fiscal_totals: list[FiscalTotal]
    frameworks: list[str]


class InvoiceAssessment(BaseModel):
    """GSTIN picked from an invoice plus the acceptance decision for it."""

    invoice_gstin: Optional[str] = None
    format_valid: bool
    state: str
    result: GstinValidationResult
