"""
GSTIN Identity Matcher — format checks and premium-mode invoice acceptance.

GSTIN layout (15 chars):
    2 digits state code + 10 char PAN + 1 entity code + 'Z' + 1 checksum char

Only the positional format is checked. The checksum character is not
recomputed.
"""

import logging
import re
from typing import Optional

from .models import GstinReason, GstinValidationResult

logger = logging.getLogger(__name__)

GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")

STATE_CODES = {
    "01": "Jammu & Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "27": "Maharashtra", "29": "Karnataka", "32": "Kerala",
    "33": "Tamil Nadu", "36": "Telangana", "37": "Andhra Pradesh",
}

MESSAGES = {
    GstinReason.FREE_MODE: "Free mode - all invoices accepted for experimentation",
    GstinReason.NO_PROFILE_GSTIN: "Add your GSTIN in Settings to enable invoice verification",
    GstinReason.NO_INVOICE_GSTIN: "Invoice does not contain a valid GSTIN",
    GstinReason.MATCHED: "GSTIN verified - Invoice matches your business profile",
    GstinReason.GSTIN_MISMATCH: "GSTIN mismatch: Invoice ({invoice}) does not match your profile ({profile})",
}


def normalize_gstin(gstin: Optional[str]) -> str:
    """Remove all whitespace and uppercase. None or non-strings become ""."""
    if not isinstance(gstin, str):
        return ""
    return re.sub(r"\s+", "", gstin).upper()


def is_valid_gstin_format(gstin: Optional[str]) -> bool:
    return bool(GSTIN_PATTERN.match(normalize_gstin(gstin)))


def state_from_gstin(gstin: Optional[str]) -> str:
    """Map the two-digit state code to a state name."""
    normalized = normalize_gstin(gstin)
    if len(normalized) < 2:
        return "Unknown"
    code = normalized[:2]
    return STATE_CODES.get(code, f"State-{code}")


def _result(valid: bool, reason: GstinReason, **fmt) -> GstinValidationResult:
    return GstinValidationResult(valid=valid, reason=reason, message=MESSAGES[reason].format(**fmt))


def validate_invoice_for_premium(
    invoice_gstin: Optional[str],
    profile_gstin: Optional[str],
    is_premium: bool,
) -> GstinValidationResult:
    """
    Decide whether an invoice is accepted for this business profile.

    Evaluated strictly in order; later branches assume premium is set:
        1. not premium            → valid   (free_mode)
        2. no profile GSTIN       → valid   (no_profile_gstin, soft warning)
        3. no invoice GSTIN       → invalid (no_invoice_gstin)
        4. normalised equal       → valid   (matched)
        5. normalised different   → invalid (gstin_mismatch)
    """
    if not is_premium:
        return _result(True, GstinReason.FREE_MODE)

    normalized_profile = normalize_gstin(profile_gstin)
    if not normalized_profile:
        return _result(True, GstinReason.NO_PROFILE_GSTIN)

    normalized_invoice = normalize_gstin(invoice_gstin)
    if not normalized_invoice:
        return _result(False, GstinReason.NO_INVOICE_GSTIN)

    if normalized_invoice == normalized_profile:
        return _result(True, GstinReason.MATCHED)

    logger.info("GSTIN mismatch: invoice=%s profile=%s", normalized_invoice, normalized_profile)
    return _result(
        False,
        GstinReason.GSTIN_MISMATCH,
        invoice=normalized_invoice,
        profile=normalized_profile,
    )


def extract_gstin_from_invoice(
    supplier_gstin: Optional[str] = None,
    buyer_gstin: Optional[str] = None,
    profile_gstin: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the invoice GSTIN that identifies this business.

    The business is usually the buyer, so the buyer side is checked first.
    Returns the value as it appeared on the document.
    """
    profile = normalize_gstin(profile_gstin)
    buyer = buyer_gstin if normalize_gstin(buyer_gstin) else None
    supplier = supplier_gstin if normalize_gstin(supplier_gstin) else None

    if profile:
        if buyer and normalize_gstin(buyer) == profile:
            return buyer
        if supplier and normalize_gstin(supplier) == profile:
            return supplier

    return buyer or supplier
