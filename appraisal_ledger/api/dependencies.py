"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session
from appraisal_ledger.infrastructure.clients.insight import InsightClient
from appraisal_ledger.infrastructure.database.session import get_db
from appraisal_ledger.infrastructure.database.repositories import BankRepository, LoanRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_actor_id(x_appraiser_id: str | None = Header(default=None)) -> str:
    """
    Identity of the signed-in appraiser.

    Issued upstream by the identity provider; every store call is scoped to it.
    """
    if not x_appraiser_id or not x_appraiser_id.strip():
        raise HTTPException(status_code=401, detail="Missing appraiser identity")
    return x_appraiser_id.strip()


def get_today() -> date:
    """Reference date for day and month buckets"""
    return date.today()


def get_bank_repository(db: Session = Depends(get_db)) -> BankRepository:
    return BankRepository(db)


def get_loan_repository(db: Session = Depends(get_db)) -> LoanRepository:
    return LoanRepository(db)


def get_insight_client() -> InsightClient:
    """Provide insight text API client instance"""
    return InsightClient()
