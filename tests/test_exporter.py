"""
Tests for the Audit Ledger Exporter and government format projections.
"""

import io
from datetime import date, datetime, timezone

import pandas as pd
import pytest

from carbon_ledger.core.exporter import (
    EMPTY_EXPORT_NOTICE,
    LEDGER_COLUMNS,
    build_gov_rows,
    build_ledger_rows,
    export_gov_xlsx,
    export_ledger_xlsx,
    gov_filename,
    ledger_filename,
)
from carbon_ledger.core.gov_formats import GOV_FORMATTERS, GOV_SHEET_NAMES
from carbon_ledger.core.models import GovFormat, LedgerEntry

TODAY = date(2025, 1, 15)
HASH = "5e884898da28047151d0e56f8dc6292773603d0d6aabbdd62a11ef721d1542d8"


def _entry(**overrides) -> LedgerEntry:
    defaults = {
        "document_hash": HASH,
        "invoice_number": "INV-88",
        "vendor": "Mahavitaran",
        "invoice_date": "2024-08-05",
        "amount": 9640.0,
        "gstin": "27AAAPL1234C1Z5",
        "hsn_code": "2716",
        "scope": 2,
        "emission_category": "electricity",
        "activity_data": 1520.0,
        "activity_unit": "kWh",
        "emission_factor": 0.82,
        "factor_source": "CEA_2024",
        "co2_kg": 1246.4,
        "verification_score": 0.85,
        "verification_status": "verified",
        "methodology_version": "BIOCOG_MVR_INDIA_v1.0",
        "created_at": datetime(2024, 8, 6, 12, 0, tzinfo=timezone.utc),
        "verified_at": datetime(2024, 8, 7, 9, 0, tzinfo=timezone.utc),
        "fiscal_year": "FY2024-2025",
        "fiscal_quarter": "Q2",
    }
    defaults.update(overrides)
    return LedgerEntry(**defaults)


def _sparse_entry() -> LedgerEntry:
    return LedgerEntry(
        document_hash="0123456789abcdef0123",
        scope=3,
        emission_category="travel",
        co2_kg=88.0,
        created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. EMPTY SNAPSHOT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestEmptyExport:
    def test_ledger_reports_notice(self):
        result = export_ledger_xlsx([], today=TODAY)
        assert result.exported is False
        assert result.notice == EMPTY_EXPORT_NOTICE
        assert result.content is None
        assert result.filename is None
        assert result.row_count == 0

    @pytest.mark.parametrize("fmt", list(GovFormat))
    def test_gov_reports_notice(self, fmt):
        result = export_gov_xlsx([], fmt, today=TODAY)
        assert result.exported is False
        assert result.notice == EMPTY_EXPORT_NOTICE
        assert result.content is None

    def test_empty_generator(self):
        assert export_ledger_xlsx(iter([])).exported is False


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. LEDGER ROWS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestLedgerRows:
    def test_fixed_column_order(self):
        rows = build_ledger_rows([_entry(), _sparse_entry()])
        for row in rows:
            assert list(row) == LEDGER_COLUMNS

    def test_hash_prefix(self):
        row = build_ledger_rows([_entry()])[0]
        assert row["Document Hash"] == HASH[:16] + "..."

    def test_values_copied(self):
        row = build_ledger_rows([_entry()])[0]
        assert row["CO₂ (kg)"] == 1246.4
        assert row["Scope"] == 2
        assert row["Status"] == "verified"
        assert row["Green Benefit"] == "No"
        assert row["Verified At"] == "2024-08-07T09:00:00+00:00"

    def test_absent_values_blank(self):
        row = build_ledger_rows([_sparse_entry()])[0]
        for column in ("Invoice #", "Vendor", "Amount", "GSTIN", "HSN", "Verified At", "Fiscal Year"):
            assert row[column] == ""
        assert row["Currency"] == "INR"

    def test_zero_values_kept(self):
        row = build_ledger_rows([_entry(co2_kg=0, activity_data=0)])[0]
        assert row["CO₂ (kg)"] == 0
        assert row["Activity Data"] == 0

    def test_compliance_annotation(self):
        row = build_ledger_rows([_entry()])[0]
        assert "CPCB: Scope 2 — Grid Electricity" in row["Compliance Frameworks"]
        assert "GHG Protocol: Category — Energy Indirect (Scope 2)" in row["Compliance Frameworks"]

    def test_unknown_category_annotation_blank(self):
        row = build_ledger_rows([_entry(emission_category="mystery")])[0]
        assert row["Compliance Frameworks"] == ""

    def test_no_filtering_and_order_kept(self):
        entries = [_entry(invoice_number="A"), _entry(invoice_number="B"), _entry(invoice_number="A")]
        rows = build_ledger_rows(entries)
        assert [r["Invoice #"] for r in rows] == ["A", "B", "A"]

    def test_snapshot_unchanged(self):
        entries = [_entry(), _sparse_entry()]
        before = [e.model_dump() for e in entries]
        build_ledger_rows(entries)
        export_ledger_xlsx(entries, today=TODAY)
        for fmt in GovFormat:
            export_gov_xlsx(entries, fmt, today=TODAY)
        assert [e.model_dump() for e in entries] == before


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 3. XLSX OUTPUT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestXlsxOutput:
    def test_filenames_embed_iso_date(self):
        assert ledger_filename(TODAY) == "compliance-ledger-2025-01-15.xlsx"
        assert gov_filename(GovFormat.BRSR, TODAY) == "brsr-compliance-2025-01-15.xlsx"
        assert gov_filename("CCTS", TODAY) == "ccts-compliance-2025-01-15.xlsx"

    def test_ledger_workbook(self):
        result = export_ledger_xlsx([_entry(), _sparse_entry()], today=TODAY)
        assert result.exported is True
        assert result.filename == "compliance-ledger-2025-01-15.xlsx"
        assert result.row_count == 2
        assert result.content[:2] == b"PK"

        frame = pd.read_excel(io.BytesIO(result.content), sheet_name="Compliance Ledger")
        assert list(frame.columns) == LEDGER_COLUMNS
        assert len(frame) == 2

    @pytest.mark.parametrize("fmt", list(GovFormat))
    def test_gov_workbook(self, fmt):
        result = export_gov_xlsx([_entry()], fmt, today=TODAY)
        assert result.exported is True
        assert result.notice == f"{fmt.value} compliance report exported"
        frame = pd.read_excel(io.BytesIO(result.content), sheet_name=GOV_SHEET_NAMES[fmt])
        assert list(frame.columns) == list(build_gov_rows([_entry()], fmt)[0])


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 4. GOVERNMENT FORMATS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestGovFormats:
    def test_closed_set(self):
        assert set(GOV_FORMATTERS) == set(GovFormat) == set(GOV_SHEET_NAMES)

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            build_gov_rows([_entry()], "CDP")

    def test_gcp(self):
        row = build_gov_rows([_entry(is_green_benefit=True, green_category="SOLAR_ENERGY")], GovFormat.GCP)[0]
        assert row["State/Region"] == "Maharashtra"
        assert row["Evidence Hash"] == HASH
        assert row["Verified CO₂ (kg)"] == 1246.4
        assert row["Green Benefit"] == "Yes"
        assert row["Green Category"] == "SOLAR_ENERGY"
        assert row["Evidence Timestamp"] == "2024-08-07T09:00:00+00:00"

    def test_gcp_timestamp_falls_back_to_created(self):
        row = build_gov_rows([_entry(verified_at=None)], GovFormat.GCP)[0]
        assert row["Evidence Timestamp"] == "2024-08-06T12:00:00+00:00"

    def test_gcp_unknown_state(self):
        row = build_gov_rows([_sparse_entry()], GovFormat.GCP)[0]
        assert row["State/Region"] == "Unknown"
        assert row["GSTIN"] == ""

    def test_brsr(self):
        row = build_gov_rows([_entry()], GovFormat.BRSR)[0]
        assert row["Scope"] == "Scope 2"
        assert row["Total Emissions (tCO₂e)"] == "1.2464"
        assert row["Reporting Period"] == "FY2024-2025 Q2"
        assert row["Data Source"] == "CEA_2024"
        assert row["Evidence Hash"] == HASH[:16]
        assert row["Green Initiative"] == "No"

    def test_brsr_defaults(self):
        row = build_gov_rows([_sparse_entry()], GovFormat.BRSR)[0]
        assert row["Data Source"] == "IND_EF_2025"
        assert row["Reporting Period"] == "N/A"

    def test_brsr_green_without_category(self):
        row = build_gov_rows([_entry(is_green_benefit=True)], GovFormat.BRSR)[0]
        assert row["Green Initiative"] == "Yes"

    def test_ccts(self):
        row = build_gov_rows([_entry()], GovFormat.CCTS)[0]
        assert row["CO₂ (tonnes)"] == "1.2464"
        assert row["Verification Score"] == "85%"
        assert row["CCTS Eligible"] == "Yes"
        assert row["State"] == "Maharashtra"
        assert row["Quarter"] == "Q2"

    @pytest.mark.parametrize("score", [None, 0.0])
    def test_ccts_pending_score(self, score):
        row = build_gov_rows([_entry(verification_score=score)], GovFormat.CCTS)[0]
        assert row["Verification Score"] == "Pending"

    @pytest.mark.parametrize("status", ["pending", "needs_review", "rejected"])
    def test_ccts_only_verified_eligible(self, status):
        row = build_gov_rows([_entry(verification_status=status)], GovFormat.CCTS)[0]
        assert row["CCTS Eligible"] == "No"

    def test_one_row_per_entry(self):
        entries = [_entry(), _entry(), _sparse_entry()]
        for fmt in GovFormat:
            assert len(build_gov_rows(entries, fmt)) == 3
