"""
Compliance Tables — static framework labels for each emission category and scope.
Separated from the classifier so that adding a framework or category is a
data edit only.
"""

from types import MappingProxyType

from .models import ComplianceLabel, Region


def _india(framework: str, label: str) -> ComplianceLabel:
    return ComplianceLabel(framework=framework, label=label, region=Region.INDIA)


def _global(framework: str, label: str) -> ComplianceLabel:
    return ComplianceLabel(framework=framework, label=label, region=Region.GLOBAL)


# ─── Framework names ──────────────────────────────────────────────────

CPCB = "CPCB"
BRSR = "BRSR"
GSTIN_HSN = "GSTIN-HSN"
GHG_PROTOCOL = "GHG Protocol"
ISO_14064 = "ISO 14064-1"


# ─── Domestic (India) labels per category ─────────────────────────────

INDIA_CATEGORY_LABELS = MappingProxyType({
    "fuel": (
        _india(CPCB, "Scope 1 — Direct Combustion"),
        _india(BRSR, "Principle 6 — GHG Emissions"),
    ),
    "electricity": (
        _india(CPCB, "Scope 2 — Grid Electricity"),
        _india(BRSR, "Principle 6 — Energy Indirect"),
    ),
    "transport": (
        _india(BRSR, "Scope 3 — Upstream Transport"),
    ),
    "materials": (
        _india(BRSR, "Scope 3 — Purchased Goods"),
        _india(GSTIN_HSN, "HSN-Classified Material"),
    ),
    "waste": (
        _india(CPCB, "Scope 3 — Waste Disposal"),
    ),
    "cloud": (
        _india(BRSR, "Scope 3 — Purchased Services"),
    ),
    "software": (
        _india(BRSR, "Scope 3 — Purchased Services"),
    ),
    "it_hardware": (
        _india(BRSR, "Scope 3 — Capital Goods"),
        _india(GSTIN_HSN, "HSN 84/85 — IT Equipment"),
    ),
    "services": (
        _india(BRSR, "Scope 3 — Professional Services"),
        _india(GSTIN_HSN, "HSN 99 — Services"),
    ),
    "travel": (
        _india(BRSR, "Scope 3 — Business Travel"),
    ),
})


# ─── Global labels per category ───────────────────────────────────────

GLOBAL_CATEGORY_LABELS = MappingProxyType({
    "fuel": (
        _global(GHG_PROTOCOL, "Category — Direct Emissions (Scope 1)"),
        _global(ISO_14064, "Category 1 — Direct GHG Emissions"),
    ),
    "electricity": (
        _global(GHG_PROTOCOL, "Category — Energy Indirect (Scope 2)"),
        _global(ISO_14064, "Category 2 — Indirect from Energy"),
    ),
    "transport": (
        _global(GHG_PROTOCOL, "Category 4 — Upstream Transport"),
        _global(ISO_14064, "Category 4 — Transport Emissions"),
    ),
    "materials": (
        _global(GHG_PROTOCOL, "Category 1 — Purchased Goods"),
        _global(ISO_14064, "Category 3 — Indirect from Transport"),
    ),
    "waste": (
        _global(GHG_PROTOCOL, "Category 5 — Waste in Operations"),
        _global(ISO_14064, "Category 5 — Waste Disposal"),
    ),
    "cloud": (
        _global(GHG_PROTOCOL, "Category 1 — Purchased Services"),
        _global(ISO_14064, "Category 3 — Other Indirect"),
    ),
    "software": (
        _global(GHG_PROTOCOL, "Category 1 — Purchased Services"),
    ),
    "it_hardware": (
        _global(GHG_PROTOCOL, "Category 2 — Capital Goods"),
        _global(ISO_14064, "Category 3 — Capital Goods"),
    ),
    "services": (
        _global(GHG_PROTOCOL, "Category 1 — Purchased Services"),
    ),
    "travel": (
        _global(GHG_PROTOCOL, "Category 6 — Business Travel"),
        _global(ISO_14064, "Category 4 — Business Travel"),
    ),
})


# ─── Scope-level labels (global first, then india) ────────────────────

SCOPE_LABELS = MappingProxyType({
    1: (
        _global(GHG_PROTOCOL, "Scope 1 — Direct Emissions"),
        _india(CPCB, "Direct Combustion"),
    ),
    2: (
        _global(GHG_PROTOCOL, "Scope 2 — Indirect from Energy"),
        _india(CPCB, "Grid Electricity"),
    ),
    3: (
        _global(GHG_PROTOCOL, "Scope 3 — Other Indirect"),
        _india(BRSR, "Value Chain Emissions"),
    ),
})
