"""Report projection - bank-wise, monthly and daily views over loans"""

from datetime import date
from enum import Enum
from typing import Dict, List, Sequence
from appraisal_ledger.domain.models import (
    Bank,
    Loan,
    BankwiseRow,
    MonthlyRow,
    DailyRow,
    ReportRow,
    ReportTotals,
    Report,
    UNKNOWN_BANK,
)
from appraisal_ledger.domain.exceptions import InvalidReportRequestError
from appraisal_ledger.utils.date_utils import day_key, is_valid_month, month_key


class ReportMode(str, Enum):
    BANKWISE = "bankwise"
    MONTHLY = "monthly"
    DAILY = "daily"


def _amount(loan: Loan) -> float:
    # Unvalued loans count as zero
    return loan.amount or 0


def bankwise_rows(loans: Sequence[Loan], banks: Sequence[Bank], fee_per_loan: float) -> List[BankwiseRow]:
    """One row per bank, loans with an unknown bank_id are left out"""
    rows = []
    for bank in banks:
        bank_loans = [loan for loan in loans if loan.bank_id == bank.id]
        rows.append(
            BankwiseRow(
                label=bank.name,
                count=len(bank_loans),
                total_amount=sum(_amount(loan) for loan in bank_loans),
                salary=len(bank_loans) * fee_per_loan,
            )
        )
    return sorted(rows, key=lambda row: row.count, reverse=True)


def monthly_rows(loans: Sequence[Loan], month: str, fee_per_loan: float) -> List[MonthlyRow]:
    """One row per day of ``month`` that has at least one loan, newest first"""
    days: Dict[str, MonthlyRow] = {}
    for loan in loans:
        if month_key(loan.date) != month:
            continue
        label = day_key(loan.date)
        row = days.setdefault(label, MonthlyRow(label=label, count=0, amount=0, salary=0))
        row.count += 1
        row.amount += _amount(loan)
        row.salary += fee_per_loan
    return sorted(days.values(), key=lambda row: row.label, reverse=True)


def daily_rows(loans: Sequence[Loan], today: date, fee_per_loan: float) -> List[DailyRow]:
    """One row per loan dated today, in input order"""
    return [
        DailyRow(
            label=loan.id,
            amount=_amount(loan),
            salary=fee_per_loan,
            bank=loan.bank_name or UNKNOWN_BANK,
            customer=loan.customer_name,
        )
        for loan in loans
        if loan.date == today
    ]


def row_amount(row: ReportRow) -> float:
    if isinstance(row, BankwiseRow):
        return row.total_amount
    return row.amount


def report_totals(rows: Sequence[ReportRow]) -> ReportTotals:
    """Column sums over the rows of a view (the footer row)"""
    return ReportTotals(
        count=sum(row.count for row in rows),
        amount=sum(row_amount(row) for row in rows),
        salary=sum(row.salary for row in rows),
    )


def build_report(
    mode: ReportMode | str,
    loans: Sequence[Loan],
    banks: Sequence[Bank],
    fee_per_loan: float,
    month: str | None = None,
    today: date | None = None,
) -> Report:
    """
    Build one of the three named report views.

    Args:
        mode: bankwise, monthly or daily
        loans: flat loan list
        banks: flat bank list
        fee_per_loan: earnings credited per appraisal
        month: YYYY-MM for the monthly view (default: month of ``today``)
        today: reference date (default: current date)

    Raises:
        InvalidReportRequestError: unknown mode or malformed month
    """
    try:
        mode = ReportMode(mode)
    except ValueError as e:
        raise InvalidReportRequestError(f"Unknown report mode: {mode}") from e

    if today is None:
        today = date.today()

    selected_month = None
    if mode is ReportMode.BANKWISE:
        rows = bankwise_rows(loans, banks, fee_per_loan)
    elif mode is ReportMode.MONTHLY:
        selected_month = month or month_key(today)
        if not is_valid_month(selected_month):
            raise InvalidReportRequestError(f"Month must be YYYY-MM, got {selected_month!r}")
        rows = monthly_rows(loans, selected_month, fee_per_loan)
    else:
        rows = daily_rows(loans, today, fee_per_loan)

    return Report(
        mode=mode.value,
        rows=rows,
        totals=report_totals(rows),
        generated_on=today,
        month=selected_month,
    )
