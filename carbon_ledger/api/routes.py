"""
FastAPI Router — REST endpoints over the ledger engines.

The caller posts the snapshot it already fetched from the ledger store;
nothing here reads or writes storage.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from carbon_ledger import config
from carbon_ledger.core.compliance import get_compliance_labels, get_scope_compliance_labels
from carbon_ledger.core.credibility import compute_credibility_score
from carbon_ledger.core.engine import assess_invoice, generate_ledger_report
from carbon_ledger.core.exporter import XLSX_MEDIA_TYPE, ExportResult, export_gov_xlsx, export_ledger_xlsx
from carbon_ledger.core.gstin import is_valid_gstin_format, normalize_gstin
from carbon_ledger.core.models import (
    ComplianceLabel,
    CredibilityResult,
    GovFormat,
    InvoiceAssessment,
    LedgerEntry,
    LedgerReport,
    VerificationRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=config.API_PREFIX, tags=["Ledger"])


# ── Request bodies ────────────────────────────────────────────


class SnapshotRequest(BaseModel):
    verifications: list[VerificationRecord] = Field(default_factory=list)
    entries: list[LedgerEntry] = Field(default_factory=list)


class ExportRequest(BaseModel):
    entries: list[LedgerEntry] = Field(default_factory=list)


class LabelsRequest(BaseModel):
    scope: int
    category: Optional[str] = Field(None, description="Omit for scope-level labels")


class GstinFormatRequest(BaseModel):
    gstin: str


class InvoiceAssessRequest(BaseModel):
    supplier_gstin: Optional[str] = None
    buyer_gstin: Optional[str] = None
    profile_gstin: Optional[str] = None
    is_premium: bool = False


# ── Helpers ───────────────────────────────────────────────────


def _download(result: ExportResult) -> Response:
    if not result.exported:
        return JSONResponse(result.to_dict())
    return Response(
        content=result.content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


# ── Endpoints ─────────────────────────────────────────────────


@router.post(
    "/credibility",
    response_model=CredibilityResult,
    summary="Compute Climate Credibility Score",
)
async def credibility(payload: SnapshotRequest) -> CredibilityResult:
    try:
        return compute_credibility_score(payload.verifications, payload.entries)
    except Exception as e:
        logger.exception("Credibility scoring failed")
        raise HTTPException(status_code=500, detail=f"Ledger engine error: {str(e)}")


@router.post(
    "/compliance/labels",
    response_model=list[ComplianceLabel],
    summary="Framework labels for a category or scope",
)
async def compliance_labels(payload: LabelsRequest) -> list[ComplianceLabel]:
    if payload.category is None:
        return get_scope_compliance_labels(payload.scope)
    return get_compliance_labels(payload.scope, payload.category)


@router.post("/gstin/validate-format", summary="Check GSTIN positional format")
async def gstin_format(payload: GstinFormatRequest) -> dict:
    return {"gstin": normalize_gstin(payload.gstin), "valid": is_valid_gstin_format(payload.gstin)}


@router.post(
    "/gstin/assess",
    response_model=InvoiceAssessment,
    summary="Decide whether an invoice belongs to the business profile",
)
async def gstin_assess(payload: InvoiceAssessRequest) -> InvoiceAssessment:
    return assess_invoice(
        payload.supplier_gstin,
        payload.buyer_gstin,
        payload.profile_gstin,
        payload.is_premium,
    )


@router.post(
    "/report",
    response_model=LedgerReport,
    summary="Full ledger report",
    description="Credibility score, per-entry labels, scope and fiscal period totals.",
)
async def ledger_report(payload: SnapshotRequest) -> LedgerReport:
    try:
        return generate_ledger_report(payload.verifications, payload.entries)
    except Exception as e:
        logger.exception("Ledger report failed")
        raise HTTPException(status_code=500, detail=f"Ledger engine error: {str(e)}")


@router.post("/export/ledger", summary="Download the compliance ledger as xlsx")
async def export_ledger(payload: ExportRequest) -> Response:
    return _download(export_ledger_xlsx(payload.entries))


@router.post("/export/{fmt}", summary="Download a government format report as xlsx")
async def export_gov(fmt: GovFormat, payload: ExportRequest) -> Response:
    return _download(export_gov_xlsx(payload.entries, fmt))


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    return {"status": "healthy", "service": config.SERVICE_NAME, "version": config.SERVICE_VERSION}
