"""
Audit Ledger Exporter — flattens a ledger snapshot into spreadsheet rows.

Two outputs:
    - the full compliance ledger (fixed ordered columns, annotated with
      compliance framework labels)
    - a government format variant (GCP / BRSR / CCTS)

Exports never filter or mutate the snapshot. An empty snapshot is reported
back as a notice instead of producing an empty file.
"""

import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from .compliance import classify_entry, format_labels
from .gov_formats import GOV_FORMATTERS, GOV_SHEET_NAMES, blank, iso
from .models import GovFormat, LedgerEntry

logger = logging.getLogger(__name__)

EMPTY_EXPORT_NOTICE = "No compliance data to export"
LEDGER_SHEET_NAME = "Compliance Ledger"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LEDGER_COLUMNS = [
    "Document Hash",
    "Invoice #",
    "Vendor",
    "Date",
    "Amount",
    "Currency",
    "Green Category",
    "Scope",
    "Emission Category",
    "Activity Data",
    "Activity Unit",
    "Emission Factor",
    "Factor Source",
    "CO₂ (kg)",
    "Green Benefit",
    "Confidence",
    "Verification Score",
    "Status",
    "Validation",
    "Failure Reason",
    "Greenwashing Risk",
    "Methodology",
    "Classification",
    "GSTIN",
    "HSN",
    "Compliance Frameworks",
    "Verified At",
    "Fiscal Year",
    "Fiscal Quarter",
]

HASH_PREFIX_LENGTH = 16


@dataclass
class ExportResult:
    """Outcome of an export request. `content` is None when nothing was exported."""
    exported: bool
    filename: Optional[str] = None
    content: Optional[bytes] = None
    row_count: int = 0
    notice: str = ""

    def to_dict(self) -> dict:
        return {
            "exported": self.exported,
            "filename": self.filename,
            "row_count": self.row_count,
            "notice": self.notice,
        }


def _ledger_row(e: LedgerEntry) -> dict:
    return {
        "Document Hash": e.document_hash[:HASH_PREFIX_LENGTH] + "...",
        "Invoice #": blank(e.invoice_number),
        "Vendor": blank(e.vendor),
        "Date": blank(e.invoice_date),
        "Amount": blank(e.amount),
        "Currency": e.currency,
        "Green Category": blank(e.green_category),
        "Scope": e.scope,
        "Emission Category": e.emission_category,
        "Activity Data": blank(e.activity_data),
        "Activity Unit": blank(e.activity_unit),
        "Emission Factor": blank(e.emission_factor),
        "Factor Source": blank(e.factor_source),
        "CO₂ (kg)": e.co2_kg,
        "Green Benefit": "Yes" if e.is_green_benefit else "No",
        "Confidence": blank(e.confidence_score),
        "Verification Score": blank(e.verification_score),
        "Status": e.verification_status.value,
        "Validation": e.validation_result,
        "Failure Reason": blank(e.validation_failure_reason),
        "Greenwashing Risk": blank(e.greenwashing_risk),
        "Methodology": e.methodology_version,
        "Classification": blank(e.classification_method),
        "GSTIN": blank(e.gstin),
        "HSN": blank(e.hsn_code),
        "Compliance Frameworks": format_labels(classify_entry(e)),
        "Verified At": iso(e.verified_at),
        "Fiscal Year": blank(e.fiscal_year),
        "Fiscal Quarter": blank(e.fiscal_quarter),
    }


def build_ledger_rows(entries: Iterable[LedgerEntry]) -> list[dict]:
    return [_ledger_row(e) for e in entries]


def build_gov_rows(entries: Iterable[LedgerEntry], fmt: GovFormat) -> list[dict]:
    return GOV_FORMATTERS[GovFormat(fmt)](entries)


def ledger_filename(today: Optional[date] = None) -> str:
    return f"compliance-ledger-{(today or date.today()).isoformat()}.xlsx"


def gov_filename(fmt: GovFormat, today: Optional[date] = None) -> str:
    return f"{GovFormat(fmt).value.lower()}-compliance-{(today or date.today()).isoformat()}.xlsx"


def rows_to_xlsx(rows: list[dict], sheet_name: str, columns: Optional[list[str]] = None) -> bytes:
    """Serialise rows to a single-sheet workbook and return the file bytes."""
    frame = pd.DataFrame(rows, columns=columns)
    buffer = io.BytesIO()
    frame.to_excel(buffer, sheet_name=sheet_name, index=False, engine="openpyxl")
    return buffer.getvalue()


def _empty_result(label: str) -> ExportResult:
    logger.warning("%s export skipped: snapshot is empty", label)
    return ExportResult(exported=False, notice=EMPTY_EXPORT_NOTICE)


def export_ledger_xlsx(entries: Iterable[LedgerEntry], today: Optional[date] = None) -> ExportResult:
    entries = list(entries)
    if not entries:
        return _empty_result("Compliance ledger")

    rows = build_ledger_rows(entries)
    filename = ledger_filename(today)
    content = rows_to_xlsx(rows, LEDGER_SHEET_NAME, columns=LEDGER_COLUMNS)
    logger.info("Exported %d ledger rows to %s", len(rows), filename)
    return ExportResult(
        exported=True,
        filename=filename,
        content=content,
        row_count=len(rows),
        notice="Compliance ledger exported",
    )


def export_gov_xlsx(
    entries: Iterable[LedgerEntry],
    fmt: GovFormat,
    today: Optional[date] = None,
) -> ExportResult:
    fmt = GovFormat(fmt)
    entries = list(entries)
    if not entries:
        return _empty_result(f"{fmt.value} compliance")

    rows = build_gov_rows(entries, fmt)
    filename = gov_filename(fmt, today)
    content = rows_to_xlsx(rows, GOV_SHEET_NAMES[fmt])
    logger.info("Exported %d %s rows to %s", len(rows), fmt.value, filename)
    return ExportResult(
        exported=True,
        filename=filename,
        content=content,
        row_count=len(rows),
        notice=f"{fmt.value} compliance report exported",
    )
