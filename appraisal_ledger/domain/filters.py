"""List filters for the loan register and bank directory"""

from datetime import date
from typing import List, Optional, Sequence
from appraisal_ledger.domain.models import Bank, Loan


def filter_loans(
    loans: Sequence[Loan],
    search: str = "",
    bank_id: Optional[str] = None,
    on_date: Optional[date] = None,
) -> List[Loan]:
    """
    Narrow a loan list, keeping input order.

    - search: case-insensitive substring of the loan id or customer name
    - bank_id: exact bank match
    - on_date: exact date match
    """
    needle = (search or "").lower()
    result = []
    for loan in loans:
        if needle and needle not in loan.id.lower() and needle not in (loan.customer_name or "").lower():
            continue
        if bank_id and loan.bank_id != bank_id:
            continue
        if on_date and loan.date != on_date:
            continue
        result.append(loan)
    return result


def filter_banks(banks: Sequence[Bank], search: str = "") -> List[Bank]:
    """Case-insensitive substring match on the bank name"""
    needle = (search or "").lower()
    return [bank for bank in banks if needle in bank.name.lower()]
