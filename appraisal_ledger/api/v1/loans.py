"""Loan register endpoints - list with filters, create, update, upsert, delete"""

import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from appraisal_ledger.api.v1.schemas import LoanIn, LoanOut, SaveResponse
from appraisal_ledger.api.dependencies import get_actor_id, get_loan_repository, get_request_id
from appraisal_ledger.infrastructure.database.repositories import LoanRepository
from appraisal_ledger.infrastructure.observability.logging import log_record_saved
from appraisal_ledger.domain.filters import filter_loans
from appraisal_ledger.domain.identity import PendingId, PersistedId, RecordId, classify_identifier, is_persisted_identifier
from appraisal_ledger.domain.models import Loan

router = APIRouter()


def _save(repo: LoanRepository, actor_id: str, record_id: RecordId, body: LoanIn, request: Request) -> SaveResponse:
    action = "update" if isinstance(record_id, PersistedId) else "insert"
    loan = Loan(
        id=str(record_id) if action == "update" else "",
        bank_id=body.bank_id,
        date=body.date,
        amount=body.amount,
        customer_name=body.customer_name,
        notes=body.notes,
    )
    success = repo.save_loan(actor_id, record_id, loan)
    log_record_saved(get_request_id(request), actor_id, "loan", action, success)
    if not success:
        raise HTTPException(status_code=503, detail="Unable to save loan")
    return SaveResponse(success=True)


@router.get("/loans", response_model=List[LoanOut])
def list_loans(
    search: str = Query("", description="Matches loan id or customer name"),
    bank_id: Optional[str] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    actor_id: str = Depends(get_actor_id),
    repo: LoanRepository = Depends(get_loan_repository),
):
    """Loans of the appraiser, newest first"""
    loans = filter_loans(repo.list_loans(actor_id), search=search, bank_id=bank_id, on_date=on_date)
    return [
        LoanOut(
            id=l.id,
            bank_id=l.bank_id,
            bank_name=l.bank_name,
            date=l.date,
            amount=l.amount,
            customer_name=l.customer_name,
            notes=l.notes,
            created_at=l.created_at,
        )
        for l in loans
    ]


@router.post("/loans", response_model=SaveResponse)
def create_loan(
    body: LoanIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: LoanRepository = Depends(get_loan_repository),
):
    """Always inserts; any id in the body is ignored"""
    return _save(repo, actor_id, PendingId(body.id or ""), body, request)


@router.put("/loans/{loan_id}", response_model=SaveResponse)
def update_loan(
    loan_id: str,
    body: LoanIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: LoanRepository = Depends(get_loan_repository),
):
    if not is_persisted_identifier(loan_id):
        raise HTTPException(status_code=400, detail="Invalid loan ID format")
    return _save(repo, actor_id, PersistedId(loan_id), body, request)


@router.post("/loans/save", response_model=SaveResponse)
def save_loan(
    body: LoanIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: LoanRepository = Depends(get_loan_repository),
):
    """
    Upsert a loan.

    A canonical id updates that loan, anything else (empty, "L-1718000000000")
    inserts a new one with a store-generated id.
    """
    return _save(repo, actor_id, classify_identifier(body.id), body, request)


@router.delete("/loans/{loan_id}", response_model=SaveResponse)
def delete_loan(
    loan_id: str,
    actor_id: str = Depends(get_actor_id),
    repo: LoanRepository = Depends(get_loan_repository),
):
    if not repo.delete_loan(actor_id, loan_id):
        logging.warning("Loan delete failed", extra={"actor_id": actor_id, "loan_id": loan_id})
        raise HTTPException(status_code=503, detail="Unable to delete loan")
    return SaveResponse(success=True)
