"""
Indian fiscal period tags. The fiscal year runs April to March.
"""

from datetime import date, datetime
from typing import Union

# Calendar month → fiscal quarter
FISCAL_QUARTERS = {
    4: "Q1", 5: "Q1", 6: "Q1",
    7: "Q2", 8: "Q2", 9: "Q2",
    10: "Q3", 11: "Q3", 12: "Q3",
    1: "Q4", 2: "Q4", 3: "Q4",
}


def fiscal_year_for(when: Union[date, datetime]) -> str:
    """FY2024-2025 for any date from 1 April 2024 to 31 March 2025."""
    start = when.year if when.month >= 4 else when.year - 1
    return f"FY{start}-{start + 1}"


def fiscal_quarter_for(when: Union[date, datetime]) -> str:
    return FISCAL_QUARTERS[when.month]


def fiscal_period_for(when: Union[date, datetime]) -> tuple[str, str]:
    return fiscal_year_for(when), fiscal_quarter_for(when)
