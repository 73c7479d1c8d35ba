"""
Tests for the ledger report orchestrator and invoice assessment.
"""

from datetime import datetime, timezone

from carbon_ledger.core.credibility import compute_credibility_score
from carbon_ledger.core.engine import assess_invoice, generate_ledger_report
from carbon_ledger.core.models import GstinReason, LedgerEntry, Region, VerificationRecord

PROFILE = "27AAAPL1234C1Z5"


def _entry(**overrides) -> LedgerEntry:
    defaults = {
        "document_hash": "d41d8cd98f00b204e9800998ecf8427e",
        "vendor": "Indian Oil Corporation",
        "invoice_date": "2024-05-20",
        "amount": 6200.0,
        "hsn_code": "2710",
        "scope": 1,
        "emission_category": "fuel",
        "co2_kg": 100.0,
        "created_at": datetime(2024, 5, 21, tzinfo=timezone.utc),
        "fiscal_year": "FY2024-2025",
        "fiscal_quarter": "Q1",
    }
    defaults.update(overrides)
    return LedgerEntry(**defaults)


class TestLedgerReport:
    def test_empty_snapshot(self):
        report = generate_ledger_report([], [])
        assert report.entry_count == 0
        assert report.total_co2_kg == 0
        assert report.credibility.score == 0
        assert report.entries == []
        assert report.scope_totals == []
        assert report.fiscal_totals == []
        assert report.frameworks == []

    def test_credibility_matches_scorer(self):
        verifications = [VerificationRecord(verification_score=0.9)]
        entries = [_entry(), _entry(is_green_benefit=True)]
        report = generate_ledger_report(verifications, entries)
        assert report.credibility == compute_credibility_score(verifications, entries)

    def test_entries_classified_in_order(self):
        entries = [_entry(), _entry(scope=2, emission_category="Electricity", co2_kg=50)]
        report = generate_ledger_report([], entries)
        assert [e.emission_category for e in report.entries] == ["fuel", "Electricity"]
        assert report.entries[1].labels[0].framework == "CPCB"
        assert {l.region for l in report.entries[0].labels} == {Region.INDIA, Region.GLOBAL}

    def test_scope_totals_skip_empty_scopes(self):
        entries = [
            _entry(co2_kg=100.0),
            _entry(co2_kg=25.5),
            _entry(scope=3, emission_category="travel", co2_kg=0.0),
            _entry(scope=2, emission_category="electricity", co2_kg=40.0),
        ]
        report = generate_ledger_report([], entries)
        assert [(s.scope, s.co2_kg, s.entry_count) for s in report.scope_totals] == [
            (1, 125.5, 2),
            (2, 40.0, 1),
        ]
        assert report.scope_totals[0].labels[0].label == "Scope 1 — Direct Emissions"
        assert report.total_co2_kg == 165.5

    def test_fiscal_totals_use_tags_then_created_at(self):
        entries = [
            _entry(co2_kg=10.0),
            _entry(co2_kg=5.0, fiscal_year=None, fiscal_quarter=None,
                   created_at=datetime(2025, 2, 10, tzinfo=timezone.utc)),
            _entry(co2_kg=2.0, fiscal_year=None, fiscal_quarter=None,
                   created_at=datetime(2024, 6, 1, tzinfo=timezone.utc)),
        ]
        report = generate_ledger_report([], entries)
        assert [(f.fiscal_year, f.fiscal_quarter, f.co2_kg, f.entry_count) for f in report.fiscal_totals] == [
            ("FY2024-2025", "Q1", 12.0, 2),
            ("FY2024-2025", "Q4", 5.0, 1),
        ]

    def test_frameworks_listed(self):
        report = generate_ledger_report([], [_entry(), _entry(scope=3, emission_category="materials")])
        assert report.frameworks == ["CPCB", "BRSR", "GHG Protocol", "ISO 14064-1", "GSTIN-HSN"]

    def test_duplicate_fingerprints_kept(self):
        report = generate_ledger_report([], [_entry(), _entry()])
        assert report.entry_count == 2
        assert len(report.entries) == 2


class TestAssessInvoice:
    def test_buyer_match(self):
        assessment = assess_invoice("29ABCDE5678G1Z9", "27aaapl1234c1z5", PROFILE, True)
        assert assessment.invoice_gstin == "27aaapl1234c1z5"
        assert assessment.format_valid is True
        assert assessment.state == "Maharashtra"
        assert assessment.result.reason == GstinReason.MATCHED

    def test_mismatch_uses_buyer(self):
        assessment = assess_invoice("29ABCDE5678G1Z9", "33AAACT1111A1Z2", PROFILE, True)
        assert assessment.invoice_gstin == "33AAACT1111A1Z2"
        assert assessment.state == "Tamil Nadu"
        assert assessment.result.valid is False
        assert assessment.result.reason == GstinReason.GSTIN_MISMATCH

    def test_no_gstin_on_invoice(self):
        assessment = assess_invoice(None, None, PROFILE, True)
        assert assessment.invoice_gstin is None
        assert assessment.format_valid is False
        assert assessment.state == "Unknown"
        assert assessment.result.reason == GstinReason.NO_INVOICE_GSTIN

    def test_free_mode(self):
        assessment = assess_invoice("29ABCDE5678G1Z9", None, PROFILE, False)
        assert assessment.result.valid is True
        assert assessment.result.reason == GstinReason.FREE_MODE
