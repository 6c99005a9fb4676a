"""GET /v1/reports/{mode} - bank-wise, monthly and daily reports with CSV and print export"""

import time
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.responses import HTMLResponse, Response

from appraisal_ledger.api.v1.schemas import (
    BankwiseReportResponse,
    DailyReportResponse,
    MonthlyReportResponse,
    ReportResponse,
)
from appraisal_ledger.api.dependencies import get_actor_id, get_bank_repository, get_loan_repository, get_today
from appraisal_ledger.config import settings
from appraisal_ledger.infrastructure.database.repositories import BankRepository, LoanRepository
from appraisal_ledger.domain.exceptions import InvalidReportRequestError
from appraisal_ledger.domain.export import to_csv, to_print_html, to_table
from appraisal_ledger.domain.models import Report
from appraisal_ledger.domain.reports import ReportMode, build_report

router = APIRouter()

_RESPONSES = {
    ReportMode.BANKWISE.value: BankwiseReportResponse,
    ReportMode.MONTHLY.value: MonthlyReportResponse,
    ReportMode.DAILY.value: DailyReportResponse,
}


def _load_report(
    mode: ReportMode,
    month: Optional[str],
    actor_id: str,
    today: date,
    bank_repo: BankRepository,
    loan_repo: LoanRepository,
) -> Report:
    try:
        return build_report(
            mode,
            loan_repo.list_loans(actor_id),
            bank_repo.list_banks(actor_id),
            fee_per_loan=settings.report_fee_per_loan,
            month=month,
            today=today,
        )
    except InvalidReportRequestError as e:
        logging.warning(f"Invalid report request: {e}", extra={"actor_id": actor_id})
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/reports/{mode}", response_model=ReportResponse)
def get_report(
    mode: ReportMode,
    month: Optional[str] = Query(None, description="YYYY-MM, monthly view only"),
    actor_id: str = Depends(get_actor_id),
    today: date = Depends(get_today),
    bank_repo: BankRepository = Depends(get_bank_repository),
    loan_repo: LoanRepository = Depends(get_loan_repository),
):
    """
    Report rows plus the totals footer.

    - bankwise: one row per bank, loans of deleted banks excluded
    - monthly: one row per day of the month that has loans, newest first
    - daily: one row per loan dated today
    """
    report = _load_report(mode, month, actor_id, today, bank_repo, loan_repo)

    payload = {
        "mode": report.mode,
        "report_date": report.generated_on,
        "rows": [asdict(row) for row in report.rows],
        "totals": asdict(report.totals),
    }
    if report.mode == ReportMode.MONTHLY.value:
        payload["month"] = report.month
    return _RESPONSES[report.mode](**payload)


@router.get("/reports/{mode}/csv")
def export_report_csv(
    mode: ReportMode,
    month: Optional[str] = Query(None),
    actor_id: str = Depends(get_actor_id),
    today: date = Depends(get_today),
    bank_repo: BankRepository = Depends(get_bank_repository),
    loan_repo: LoanRepository = Depends(get_loan_repository),
):
    """Download the report as CSV (header + data rows)"""
    report = _load_report(mode, month, actor_id, today, bank_repo, loan_repo)
    filename = f"appraisal_report_{report.mode}_{int(time.time() * 1000)}.csv"
    return Response(
        content=to_csv(to_table(report)),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/reports/{mode}/print", response_class=HTMLResponse)
def print_report(
    mode: ReportMode,
    month: Optional[str] = Query(None),
    actor_id: str = Depends(get_actor_id),
    today: date = Depends(get_today),
    bank_repo: BankRepository = Depends(get_bank_repository),
    loan_repo: LoanRepository = Depends(get_loan_repository),
):
    """Printable HTML page of the same table, totals row included"""
    report = _load_report(mode, month, actor_id, today, bank_repo, loan_repo)
    return HTMLResponse(content=to_print_html(to_table(report), report.generated_on.isoformat()))
