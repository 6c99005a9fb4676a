"""Dashboard aggregation engine - core statistics over loans and banks"""

from datetime import date
from typing import Dict, List, Sequence
from appraisal_ledger.domain.models import Bank, Loan, BankCount, PeriodStats, DashboardStats
from appraisal_ledger.utils.date_utils import month_key


def count_loans_by_bank(loans: Sequence[Loan], banks: Sequence[Bank]) -> Dict[str, int]:
    """
    Count loans per known bank id.

    Every bank gets an entry, including banks with no loans. Loans whose
    bank_id matches no bank are dropped.
    """
    counts = {bank.id: 0 for bank in banks}
    for loan in loans:
        if loan.bank_id in counts:
            counts[loan.bank_id] += 1
    return counts


def period_stats(loans: Sequence[Loan], fee_per_loan: float) -> PeriodStats:
    return PeriodStats(count=len(loans), earnings=len(loans) * fee_per_loan)


def bank_breakdown(loans: Sequence[Loan], banks: Sequence[Bank], fee_per_loan: float) -> List[BankCount]:
    """Per-bank loan counts, highest first. Ties keep bank-list order."""
    counts = count_loans_by_bank(loans, banks)
    breakdown = [
        BankCount(
            bank_id=bank.id,
            bank_name=bank.name,
            count=counts[bank.id],
            earnings=counts[bank.id] * fee_per_loan,
        )
        for bank in banks
    ]
    # sorted() is stable
    return sorted(breakdown, key=lambda item: item.count, reverse=True)


def compute_dashboard_stats(
    loans: Sequence[Loan],
    banks: Sequence[Bank],
    fee_per_loan: float,
    today: date | None = None,
) -> DashboardStats:
    """
    Main entry point: derive dashboard statistics.

    Pure function of its inputs; ``today`` defaults to the current date at
    call time.

    Buckets:
    - today: loans dated exactly today
    - month: loans whose date falls in today's YYYY-MM
    - overall: every loan
    """
    if today is None:
        today = date.today()

    current_month = month_key(today)
    today_loans = [loan for loan in loans if loan.date == today]
    month_loans = [loan for loan in loans if month_key(loan.date) == current_month]

    return DashboardStats(
        today=period_stats(today_loans, fee_per_loan),
        month=period_stats(month_loans, fee_per_loan),
        overall=period_stats(loans, fee_per_loan),
        active_banks=len(banks),
        bank_wise=bank_breakdown(loans, banks, fee_per_loan),
        fee_per_loan=fee_per_loan,
    )
