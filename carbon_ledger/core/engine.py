"""
Ledger Engine — main orchestrator.

Two entry points:
    generate_ledger_report(verifications, entries)  → LedgerReport
    assess_invoice(supplier, buyer, profile, premium) → InvoiceAssessment

Everything here is a pure function of the snapshot passed in.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import Optional

from .compliance import classify_entry, frameworks_covered, get_scope_compliance_labels
from .credibility import compute_credibility_score
from .fiscal import fiscal_period_for
from .gstin import (
    extract_gstin_from_invoice,
    is_valid_gstin_format,
    state_from_gstin,
    validate_invoice_for_premium,
)
from .models import (
    ClassifiedEntry,
    FiscalTotal,
    InvoiceAssessment,
    LedgerEntry,
    LedgerReport,
    ScopeTotal,
    VerificationRecord,
)

logger = logging.getLogger(__name__)


def _scope_totals(entries: list[LedgerEntry]) -> list[ScopeTotal]:
    """Per-scope CO2 totals; scopes with no positive emissions are left out."""
    co2 = defaultdict(float)
    counts = defaultdict(int)
    for e in entries:
        co2[e.scope] += e.co2_kg
        counts[e.scope] += 1

    return [
        ScopeTotal(
            scope=scope,
            co2_kg=round(co2[scope], 4),
            entry_count=counts[scope],
            labels=get_scope_compliance_labels(scope),
        )
        for scope in sorted(co2)
        if co2[scope] > 0
    ]


def _fiscal_totals(entries: list[LedgerEntry]) -> list[FiscalTotal]:
    """Totals per fiscal period. Missing tags fall back to the entry's creation date."""
    co2 = defaultdict(float)
    counts = defaultdict(int)
    for e in entries:
        derived_year, derived_quarter = fiscal_period_for(e.created_at)
        key = (e.fiscal_year or derived_year, e.fiscal_quarter or derived_quarter)
        co2[key] += e.co2_kg
        counts[key] += 1

    return [
        FiscalTotal(
            fiscal_year=year,
            fiscal_quarter=quarter,
            co2_kg=round(co2[(year, quarter)], 4),
            entry_count=counts[(year, quarter)],
        )
        for year, quarter in sorted(co2)
    ]


def generate_ledger_report(
    verifications: Iterable[VerificationRecord],
    entries: Iterable[LedgerEntry],
) -> LedgerReport:
    """
    Build the full derived view of a snapshot.

    Pipeline:
        1. compute_credibility_score()  → CredibilityResult
        2. classify_entry()             → labels per line item
        3. _scope_totals()              → per-scope CO2 with scope labels
        4. _fiscal_totals()             → per fiscal period CO2
        5. frameworks_covered()         → distinct frameworks touched
    """
    verifications = list(verifications)
    entries = list(entries)

    credibility = compute_credibility_score(verifications, entries)

    classified = [
        ClassifiedEntry(
            document_hash=e.document_hash,
            invoice_number=e.invoice_number,
            scope=e.scope,
            emission_category=e.emission_category,
            co2_kg=e.co2_kg,
            labels=classify_entry(e),
        )
        for e in entries
    ]

    report = LedgerReport(
        entry_count=len(entries),
        total_co2_kg=round(sum(e.co2_kg for e in entries), 4),
        credibility=credibility,
        entries=classified,
        scope_totals=_scope_totals(entries),
        fiscal_totals=_fiscal_totals(entries),
        frameworks=frameworks_covered(entries),
    )
    logger.info(
        "Ledger report: %d entries, %d verifications, credibility %d (%s)",
        report.entry_count, len(verifications), credibility.score, credibility.grade.value,
    )
    return report


def assess_invoice(
    supplier_gstin: Optional[str],
    buyer_gstin: Optional[str],
    profile_gstin: Optional[str],
    is_premium: bool,
) -> InvoiceAssessment:
    """Pick the invoice GSTIN that should identify the business, then gate it."""
    invoice_gstin = extract_gstin_from_invoice(supplier_gstin, buyer_gstin, profile_gstin)
    result = validate_invoice_for_premium(invoice_gstin, profile_gstin, is_premium)
    return InvoiceAssessment(
        invoice_gstin=invoice_gstin,
        format_valid=is_valid_gstin_format(invoice_gstin),
        state=state_from_gstin(invoice_gstin),
        result=result,
    )
