"""Insight text inputs and fallback policy"""

import json
from datetime import date
from typing import Sequence
from appraisal_ledger.domain.models import Bank, Loan, InsightRequest

NO_DATA_INSIGHT = "Add your first loan entry to see personalized professional insights."
FAILURE_INSIGHT = (
    "Keep up the consistent appraisal work to maintain a balanced workload across your partner banks."
)
EMPTY_INSIGHT = "Keep up the consistent work."

# Bucket for loans whose bank no longer exists
OTHER_BANK = "Other"


def build_insight_request(loans: Sequence[Loan], banks: Sequence[Bank], today: date | None = None) -> InsightRequest:
    """Total count plus loans per bank display name"""
    names = {bank.id: bank.name for bank in banks}
    per_bank: dict[str, int] = {}
    for loan in loans:
        name = names.get(loan.bank_id, OTHER_BANK)
        per_bank[name] = per_bank.get(name, 0) + 1

    return InsightRequest(
        total_count=len(loans),
        per_bank=per_bank,
        as_of=today or date.today(),
    )


def build_prompt(request: InsightRequest) -> str:
    return (
        "As a professional banking consultant, analyze this gold loan appraiser's workload "
        "and provide a brief, professional 2-3 sentence summary/insight.\n"
        f"Total Loans: {request.total_count}\n"
        f"Distribution per bank: {json.dumps(request.per_bank)}\n"
        f"Current Date: {request.as_of.isoformat()}"
    )
