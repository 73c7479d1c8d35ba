"""
Climate Credibility Scorer: a single 0–100 trust metric for an MSME.

Score =
    0.30 × VerificationAverage   (mean verification_score, ×100)
  + 0.25 × GreenRatio            (green-benefit entries / all entries)
  + 0.25 × DataCompleteness      (entries with vendor + date + amount + HSN)
  + 0.20 × HistoryDepth          (scored submissions, saturating at 50)

Grade Bands:
    90–100 → A+
    75–89  → A
    55–74  → B
    35–54  → C
    0–34   → D

Pure function of the snapshot it is given. Malformed numbers are treated
as absent, empty inputs score 0.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from .models import (
    CredibilityBreakdown,
    CredibilityResult,
    Grade,
    coerce_float,
    coerce_unit_score,
)

logger = logging.getLogger(__name__)

# Component weights (must sum to 1.0)
CREDIBILITY_WEIGHTS = {
    "verification_avg": 0.30,
    "green_ratio": 0.25,
    "data_completeness": 0.25,
    "history_depth": 0.20,
}

HISTORY_DEPTH_CAP = 50

# Minimum score for each grade, highest first
GRADE_BANDS = [
    (90, Grade.A_PLUS),
    (75, Grade.A),
    (55, Grade.B),
    (35, Grade.C),
    (0, Grade.D),
]


def _field(record: Any, name: str) -> Any:
    """Read a field from a pydantic model, plain object or mapping."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _positive_scores(verifications: Iterable[Any]) -> list[float]:
    """Scores of exactly 0 mean "not yet scored" and are dropped with the absent ones."""
    scores = []
    for record in verifications:
        score = coerce_unit_score(_field(record, "verification_score"))
        if score is not None and score > 0:
            scores.append(score)
    return scores


def _is_complete(entry: Any) -> bool:
    amount = coerce_float(_field(entry, "amount"))
    return (
        _has_text(_field(entry, "vendor"))
        and _field(entry, "invoice_date") not in (None, "")
        and amount is not None
        and amount > 0
        and _has_text(_field(entry, "hsn_code"))
    )


def grade_for_score(score: int) -> Grade:
    for minimum, grade in GRADE_BANDS:
        if score >= minimum:
            return grade
    return Grade.D


def compute_credibility_score(verifications: Iterable[Any], ledger_entries: Iterable[Any]) -> CredibilityResult:
    """
    Compute the credibility score for one business.

    `verifications` and `ledger_entries` may hold models or plain dicts
    straight from the store; neither is mutated.
    """
    verifications = list(verifications)
    entries = list(ledger_entries)

    scores = _positive_scores(verifications)
    verification_avg = (sum(scores) / len(scores)) * 100 if scores else 0.0

    total = len(entries)
    green_count = sum(1 for e in entries if _field(e, "is_green_benefit") is True)
    complete_count = sum(1 for e in entries if _is_complete(e))
    green_ratio = (green_count / total) * 100 if total else 0.0
    data_completeness = (complete_count / total) * 100 if total else 0.0

    history_depth = min(len(scores), HISTORY_DEPTH_CAP) / HISTORY_DEPTH_CAP * 100

    components = {
        "verification_avg": verification_avg,
        "green_ratio": green_ratio,
        "data_completeness": data_completeness,
        "history_depth": history_depth,
    }
    weighted = sum(CREDIBILITY_WEIGHTS[name] * value for name, value in components.items())
    score = max(0, min(100, _round_half_up(weighted)))

    logger.debug(
        "Credibility components=%s entries=%d verifications=%d -> score=%d",
        {k: round(v, 2) for k, v in components.items()}, total, len(verifications), score,
    )

    return CredibilityResult(
        score=score,
        grade=grade_for_score(score),
        breakdown=CredibilityBreakdown(
            verification_avg=_round_half_up(verification_avg),
            green_ratio=_round_half_up(green_ratio),
            data_completeness=_round_half_up(data_completeness),
            history_depth=_round_half_up(history_depth),
        ),
    )
