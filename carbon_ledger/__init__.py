"""Carbon ledger engine: credibility scoring, compliance labels, GSTIN matching and ledger export."""

__version__ = "1.0.0"
