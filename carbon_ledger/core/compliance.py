"""
Compliance Classifier — maps emission lines to regulatory framework labels.

Classification is additive and never blocking: unknown categories or
scopes simply produce no labels for that jurisdiction.
"""

from collections.abc import Iterable
from typing import Optional

from .compliance_tables import (
    GLOBAL_CATEGORY_LABELS,
    INDIA_CATEGORY_LABELS,
    SCOPE_LABELS,
)
from .models import ComplianceLabel, LedgerEntry


def _category_key(category: Optional[str]) -> str:
    if not isinstance(category, str):
        return ""
    return category.strip().lower()


def get_compliance_labels(scope: int, category: Optional[str]) -> list[ComplianceLabel]:
    """
    Return India labels followed by global labels for a category.
    The scope is accepted for call-site symmetry; category alone decides.
    """
    key = _category_key(category)
    india = INDIA_CATEGORY_LABELS.get(key, ())
    global_ = GLOBAL_CATEGORY_LABELS.get(key, ())
    return [*india, *global_]


def get_scope_compliance_labels(scope: int) -> list[ComplianceLabel]:
    """Fixed global + India label pair for a GHG scope; unknown scope → []."""
    return list(SCOPE_LABELS.get(scope, ()))


def classify_entry(entry: LedgerEntry) -> list[ComplianceLabel]:
    return get_compliance_labels(entry.scope, entry.emission_category)


def format_labels(labels: Iterable[ComplianceLabel]) -> str:
    """Flatten labels to "CPCB: Scope 1 — Direct Combustion; ..." for tabular output."""
    return "; ".join(f"{label.framework}: {label.label}" for label in labels)


def frameworks_covered(entries: Iterable[LedgerEntry]) -> list[str]:
    """Distinct framework names touched by a snapshot, in first-seen order."""
    seen: dict[str, None] = {}
    for entry in entries:
        for label in classify_entry(entry):
            seen.setdefault(label.framework, None)
    return list(seen)
