"""
Compliance Ledger Engines
==========================
Pure computations over a ledger snapshot for one MSME.

Modules:
    - credibility: 0–100 credibility score and letter grade
    - compliance: India + global framework labels per category / scope
    - gstin: GSTIN format checks and premium invoice acceptance
    - exporter: spreadsheet and government-format ledger exports
    - engine: combined ledger report and invoice assessment
"""

from .models import (
    ComplianceLabel,
    CredibilityResult,
    GovFormat,
    GstinValidationResult,
    LedgerEntry,
    LedgerReport,
    VerificationRecord,
)
from .credibility import compute_credibility_score
from .compliance import get_compliance_labels, get_scope_compliance_labels
from .gstin import (
    extract_gstin_from_invoice,
    is_valid_gstin_format,
    validate_invoice_for_premium,
)
from .exporter import ExportResult, export_gov_xlsx, export_ledger_xlsx
from .engine import assess_invoice, generate_ledger_report

__all__ = [
    "ComplianceLabel",
    "CredibilityResult",
    "GovFormat",
    "GstinValidationResult",
    "LedgerEntry",
    "LedgerReport",
    "VerificationRecord",
    "compute_credibility_score",
    "get_compliance_labels",
    "get_scope_compliance_labels",
    "extract_gstin_from_invoice",
    "is_valid_gstin_format",
    "validate_invoice_for_premium",
    "ExportResult",
    "export_gov_xlsx",
    "export_ledger_xlsx",
    "assess_invoice",
    "generate_ledger_report",
]
