"""Date manipulation utilities"""

import re
from datetime import date

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def day_key(day: date) -> str:
    """ISO calendar day, e.g. 2024-05-02"""
    return day.isoformat()


def month_key(day: date) -> str:
    """Year-month prefix of an ISO date, e.g. 2024-05"""
    return day.isoformat()[:7]


def is_valid_month(month: str) -> bool:
    """Check a YYYY-MM string"""
    return bool(month) and MONTH_PATTERN.fullmatch(month) is not None
