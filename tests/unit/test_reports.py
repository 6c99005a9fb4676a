"""Unit tests for report projection"""

import pytest
from datetime import date
from appraisal_ledger.domain.exceptions import InvalidReportRequestError
from appraisal_ledger.domain.models import Bank, BankwiseRow, DailyRow, Loan, MonthlyRow
from appraisal_ledger.domain.reports import ReportMode, build_report

TODAY = date(2024, 5, 2)


def test_bankwise_scenario(sample_loans, sample_banks):
    """Alpha (2 loans) before Beta (1 loan), amounts summed, fee 300"""
    report = build_report("bankwise", sample_loans, sample_banks, fee_per_loan=300, today=TODAY)

    assert report.rows == [
        BankwiseRow(label="Alpha", count=2, total_amount=3000, salary=600),
        BankwiseRow(label="Beta", count=1, total_amount=500, salary=300),
    ]
    assert report.totals.count == 3
    assert report.totals.amount == 3500
    assert report.totals.salary == 900


def test_bankwise_excludes_orphans_from_rows_and_totals(sample_loans, sample_banks):
    loans = sample_loans + [Loan(id="orphan", bank_id="nonexistent", date=TODAY, amount=9999)]

    report = build_report(ReportMode.BANKWISE, loans, sample_banks, fee_per_loan=300, today=TODAY)

    assert len(report.rows) == len(sample_banks)
    assert report.totals.count == 3
    assert report.totals.amount == 3500


def test_bankwise_null_amounts_count_as_zero():
    banks = [Bank(id="b1", name="Alpha")]
    loans = [Loan(id="l1", bank_id="b1", date=TODAY, amount=None), Loan(id="l2", bank_id="b1", date=TODAY, amount=700)]

    report = build_report("bankwise", loans, banks, fee_per_loan=350, today=TODAY)

    assert report.rows[0].total_amount == 700
    assert report.rows[0].salary == 700


def test_monthly_scenario(sample_loans, sample_banks):
    report = build_report("monthly", sample_loans, sample_banks, fee_per_loan=300, month="2024-05", today=TODAY)

    assert report.month == "2024-05"
    assert report.rows == [
        MonthlyRow(label="2024-05-02", count=2, amount=2500, salary=600),
        MonthlyRow(label="2024-05-01", count=1, amount=1000, salary=300),
    ]


def test_monthly_counts_match_month_and_skip_empty_days(sample_loans, sample_banks):
    loans = sample_loans + [
        Loan(id="l4", bank_id="b1", date=date(2024, 4, 30), amount=100),
        Loan(id="l5", bank_id="nonexistent", date=date(2024, 5, 20), amount=None),
    ]

    report = build_report("monthly", loans, sample_banks, fee_per_loan=300, month="2024-05", today=TODAY)

    assert [row.label for row in report.rows] == ["2024-05-20", "2024-05-02", "2024-05-01"]
    assert sum(row.count for row in report.rows) == 4
    # orphans are part of the monthly view and its footer
    assert report.totals.count == 4
    assert report.totals.amount == 3500


def test_monthly_defaults_to_current_month(sample_loans, sample_banks):
    report = build_report("monthly", sample_loans, sample_banks, fee_per_loan=300, today=TODAY)
    assert report.month == "2024-05"
    assert report.totals.count == 3


@pytest.mark.parametrize("month", ["2024-13", "2024-5", "2024-05\n", "May 2024"])
def test_monthly_rejects_malformed_month(sample_loans, sample_banks, month):
    with pytest.raises(InvalidReportRequestError):
        build_report("monthly", sample_loans, sample_banks, fee_per_loan=300, month=month, today=TODAY)


def test_daily_rows_one_per_loan_in_input_order(sample_loans, sample_banks):
    loans = sample_loans + [Loan(id="orphan", bank_id="gone", date=TODAY, amount=None)]

    report = build_report("daily", loans, sample_banks, fee_per_loan=350, today=TODAY)

    assert [row.label for row in report.rows] == ["l2", "l3", "orphan"]
    assert all(row.count == 1 for row in report.rows)
    assert report.rows[0] == DailyRow(label="l2", amount=2000, salary=350, bank="Alpha", customer="Meena")
    assert report.rows[2].bank == "Unknown"
    assert report.rows[2].amount == 0
    assert report.totals.count == 3
    assert report.totals.salary == 1050


def test_unknown_mode_raises(sample_loans, sample_banks):
    with pytest.raises(InvalidReportRequestError):
        build_report("weekly", sample_loans, sample_banks, fee_per_loan=300, today=TODAY)


def test_empty_report_has_zero_totals():
    report = build_report("daily", [], [], fee_per_loan=350, today=TODAY)
    assert report.rows == []
    assert report.totals.count == 0
    assert report.totals.amount == 0
    assert report.totals.salary == 0
