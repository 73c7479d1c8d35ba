"""
Government format projections for the compliance ledger.

    GCP  → Green Credit Programme
    BRSR → Business Responsibility & Sustainability Reporting
    CCTS → Carbon Credit Trading Scheme

Each projection re-labels and re-shapes existing ledger values. Emission
values are only unit-converted (kg → tonnes), never recomputed.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Optional

from .gstin import state_from_gstin
from .models import GovFormat, LedgerEntry, VerificationStatus

DEFAULT_BRSR_FACTOR_SOURCE = "IND_EF_2025"


def blank(value: Any) -> Any:
    """Absent values export as empty cells."""
    return "" if value is None else value


def iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ""


def tonnes(co2_kg: float) -> str:
    return f"{co2_kg / 1000:.4f}"


def _percent(score: Optional[float]) -> str:
    # zero means "not yet scored", same as the credibility scorer
    if not score:
        return "Pending"
    return f"{int(score * 100 + 0.5)}%"


def format_for_gcp(entries: Iterable[LedgerEntry]) -> list[dict]:
    return [
        {
            "Activity Type": e.emission_category,
            "Evidence Hash": e.document_hash,
            "State/Region": state_from_gstin(e.gstin),
            "GSTIN": blank(e.gstin),
            "HSN Code": blank(e.hsn_code),
            "Quantity": blank(e.activity_data),
            "Quantity Unit": blank(e.activity_unit),
            "Verified CO₂ (kg)": e.co2_kg,
            "Green Benefit": "Yes" if e.is_green_benefit else "No",
            "Green Category": blank(e.green_category),
            "Methodology": e.methodology_version,
            "Verification Status": e.verification_status.value,
            "Verification Score": blank(e.verification_score),
            "Evidence Timestamp": iso(e.verified_at or e.created_at),
            "Fiscal Year": blank(e.fiscal_year),
            "Invoice Reference": blank(e.invoice_number),
        }
        for e in entries
    ]


def format_for_brsr(entries: Iterable[LedgerEntry]) -> list[dict]:
    return [
        {
            "Scope": f"Scope {e.scope}",
            "Category": e.emission_category,
            "Total Emissions (tCO₂e)": tonnes(e.co2_kg),
            "Activity Data": blank(e.activity_data),
            "Unit": blank(e.activity_unit),
            "Emission Factor": blank(e.emission_factor),
            "Data Source": e.factor_source or DEFAULT_BRSR_FACTOR_SOURCE,
            "Reporting Period": f"{e.fiscal_year or 'N/A'} {e.fiscal_quarter or ''}".strip(),
            "Verification Status": e.verification_status.value,
            "Green Initiative": (e.green_category or "Yes") if e.is_green_benefit else "No",
            "Methodology": e.methodology_version,
            "Evidence Hash": e.document_hash[:16],
        }
        for e in entries
    ]


def format_for_ccts(entries: Iterable[LedgerEntry]) -> list[dict]:
    return [
        {
            "Entity GSTIN": blank(e.gstin),
            "State": state_from_gstin(e.gstin),
            "Scope": e.scope,
            "Emission Source": e.emission_category,
            "CO₂ (tonnes)": tonnes(e.co2_kg),
            "Activity Data": blank(e.activity_data),
            "Activity Unit": blank(e.activity_unit),
            "Emission Factor": blank(e.emission_factor),
            "Factor Source": blank(e.factor_source),
            "Verification Score": _percent(e.verification_score),
            "Verified At": iso(e.verified_at),
            "Methodology": e.methodology_version,
            "Evidence Hash": e.document_hash,
            "Fiscal Year": blank(e.fiscal_year),
            "Quarter": blank(e.fiscal_quarter),
            "CCTS Eligible": "Yes" if e.verification_status == VerificationStatus.VERIFIED else "No",
        }
        for e in entries
    ]


GOV_FORMATTERS: dict[GovFormat, Callable[[Iterable[LedgerEntry]], list[dict]]] = {
    GovFormat.GCP: format_for_gcp,
    GovFormat.BRSR: format_for_brsr,
    GovFormat.CCTS: format_for_ccts,
}

GOV_SHEET_NAMES = {
    GovFormat.GCP: "Green Credit Programme",
    GovFormat.BRSR: "BRSR Disclosure",
    GovFormat.CCTS: "CCTS Registry",
}
