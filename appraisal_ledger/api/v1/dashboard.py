"""GET /v1/dashboard - numeric statistics and the separate insight text"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, Request

from appraisal_ledger.api.v1.schemas import DashboardResponse, PeriodSchema, BankCountSchema, InsightResponse
from appraisal_ledger.api.dependencies import (
    get_actor_id,
    get_bank_repository,
    get_insight_client,
    get_loan_repository,
    get_request_id,
    get_today,
)
from appraisal_ledger.config import settings
from appraisal_ledger.infrastructure.clients.insight import InsightClient
from appraisal_ledger.infrastructure.database.repositories import BankRepository, LoanRepository
from appraisal_ledger.infrastructure.observability.metrics import insight_fallback_counter
from appraisal_ledger.domain.aggregation import compute_dashboard_stats
from appraisal_ledger.domain.exceptions import InsightAPIError
from appraisal_ledger.domain.insights import (
    build_insight_request,
    EMPTY_INSIGHT,
    FAILURE_INSIGHT,
    NO_DATA_INSIGHT,
)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    actor_id: str = Depends(get_actor_id),
    today: date = Depends(get_today),
    bank_repo: BankRepository = Depends(get_bank_repository),
    loan_repo: LoanRepository = Depends(get_loan_repository),
):
    """
    Today / month / overall counts and earnings plus the per-bank breakdown.

    Never waits on the insight text, which has its own endpoint.
    """
    stats = compute_dashboard_stats(
        loan_repo.list_loans(actor_id),
        bank_repo.list_banks(actor_id),
        fee_per_loan=settings.dashboard_fee_per_loan,
        today=today,
    )

    return DashboardResponse(
        today=PeriodSchema(count=stats.today.count, earnings=stats.today.earnings),
        month=PeriodSchema(count=stats.month.count, earnings=stats.month.earnings),
        overall=PeriodSchema(count=stats.overall.count, earnings=stats.overall.earnings),
        active_banks=stats.active_banks,
        bank_wise=[
            BankCountSchema(bank_id=b.bank_id, bank_name=b.bank_name, count=b.count, earnings=b.earnings)
            for b in stats.bank_wise
        ],
        fee_per_loan=stats.fee_per_loan,
        currency_symbol=settings.currency_symbol,
    )


@router.get("/dashboard/insight", response_model=InsightResponse)
async def get_dashboard_insight(
    request: Request,
    actor_id: str = Depends(get_actor_id),
    today: date = Depends(get_today),
    bank_repo: BankRepository = Depends(get_bank_repository),
    loan_repo: LoanRepository = Depends(get_loan_repository),
    insight_client: InsightClient = Depends(get_insight_client),
):
    """
    Short natural-language summary of the appraiser's workload.

    Always answers 200: with no loans, or when the insight API fails, a fixed
    fallback text is returned instead.
    """
    request_id = get_request_id(request)
    loans = loan_repo.list_loans(actor_id)

    if not loans:
        insight_fallback_counter.labels(reason="no_data").inc()
        return InsightResponse(text=NO_DATA_INSIGHT, fallback=True)

    insight_request = build_insight_request(loans, bank_repo.list_banks(actor_id), today)

    try:
        text = await insight_client.summarize(insight_request)
    except InsightAPIError as e:
        insight_fallback_counter.labels(reason="api_error").inc()
        logging.warning(f"Insight API error: {e}", extra={"request_id": request_id})
        return InsightResponse(text=FAILURE_INSIGHT, fallback=True)

    if not text:
        insight_fallback_counter.labels(reason="empty").inc()
        return InsightResponse(text=EMPTY_INSIGHT, fallback=True)

    return InsightResponse(text=text, fallback=False)
