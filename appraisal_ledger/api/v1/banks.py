"""Bank directory endpoints - list, create, rename, upsert, delete"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from appraisal_ledger.api.v1.schemas import BankIn, BankOut, SaveResponse
from appraisal_ledger.api.dependencies import get_actor_id, get_bank_repository, get_request_id
from appraisal_ledger.infrastructure.database.repositories import BankRepository
from appraisal_ledger.infrastructure.observability.logging import log_record_saved
from appraisal_ledger.domain.filters import filter_banks
from appraisal_ledger.domain.identity import PendingId, PersistedId, RecordId, classify_identifier, is_persisted_identifier
from appraisal_ledger.domain.models import Bank

router = APIRouter()


def _save(repo: BankRepository, actor_id: str, record_id: RecordId, body: BankIn, request: Request) -> SaveResponse:
    action = "update" if isinstance(record_id, PersistedId) else "insert"
    bank = Bank(id=str(record_id) if action == "update" else "", name=body.name)
    success = repo.save_bank(actor_id, record_id, bank)
    log_record_saved(get_request_id(request), actor_id, "bank", action, success)
    if not success:
        raise HTTPException(status_code=503, detail="Unable to save bank")
    return SaveResponse(success=True)


@router.get("/banks", response_model=List[BankOut])
def list_banks(
    search: str = Query("", description="Case-insensitive name filter"),
    actor_id: str = Depends(get_actor_id),
    repo: BankRepository = Depends(get_bank_repository),
):
    """Banks of the appraiser, ordered by name"""
    banks = filter_banks(repo.list_banks(actor_id), search)
    return [BankOut(id=b.id, name=b.name, created_at=b.created_at) for b in banks]


@router.post("/banks", response_model=SaveResponse)
def create_bank(
    body: BankIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: BankRepository = Depends(get_bank_repository),
):
    """Always inserts; any id in the body is ignored"""
    return _save(repo, actor_id, PendingId(body.id or ""), body, request)


@router.put("/banks/{bank_id}", response_model=SaveResponse)
def rename_bank(
    bank_id: str,
    body: BankIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: BankRepository = Depends(get_bank_repository),
):
    if not is_persisted_identifier(bank_id):
        raise HTTPException(status_code=400, detail="Invalid bank ID format")
    return _save(repo, actor_id, PersistedId(bank_id), body, request)


@router.post("/banks/save", response_model=SaveResponse)
def save_bank(
    body: BankIn,
    request: Request,
    actor_id: str = Depends(get_actor_id),
    repo: BankRepository = Depends(get_bank_repository),
):
    """
    Upsert a bank.

    A canonical id updates that bank, anything else (empty, "B-1718000000000")
    inserts a new one.
    """
    return _save(repo, actor_id, classify_identifier(body.id), body, request)


@router.delete("/banks/{bank_id}", response_model=SaveResponse)
def delete_bank(
    bank_id: str,
    actor_id: str = Depends(get_actor_id),
    repo: BankRepository = Depends(get_bank_repository),
):
    """Delete a bank. Its loans stay and show up as "Unknown"."""
    if not repo.delete_bank(actor_id, bank_id):
        logging.warning("Bank delete failed", extra={"actor_id": actor_id, "bank_id": bank_id})
        raise HTTPException(status_code=503, detail="Unable to delete bank")
    return SaveResponse(success=True)
