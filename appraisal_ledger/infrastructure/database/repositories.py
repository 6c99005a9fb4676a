"""Data access layer for banks and loans.

Every call is scoped to one appraiser. Store failures never propagate: they
are rolled back, logged for the operator and reported as an empty list or
False.
"""

import logging
from typing import List
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from appraisal_ledger.infrastructure.database.models import BankRecord, LoanRecord
from appraisal_ledger.infrastructure.observability.metrics import (
    record_save,
    record_store_failure,
    records_deleted_counter,
)
from appraisal_ledger.domain.models import Bank, Loan
from appraisal_ledger.domain.identity import PersistedId, RecordId, classify_identifier

logger = logging.getLogger(__name__)


class BankRepository:
    """Repository for partner banks"""

    def __init__(self, db: Session):
        self.db = db

    def list_banks(self, actor_id: str) -> List[Bank]:
        """All banks of the appraiser, ordered by name"""
        try:
            rows = (
                self.db.query(BankRecord)
                .filter(BankRecord.appraiser_id == actor_id)
                .order_by(BankRecord.name)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("bank", "list")
            logger.error(f"Error fetching banks: {e}", extra={"actor_id": actor_id})
            return []

        return [Bank(id=row.id, name=row.name, created_at=row.created_at) for row in rows]

    def save_bank(self, actor_id: str, record_id: RecordId, bank: Bank) -> bool:
        """Insert for a pending id, rename for a persisted id"""
        action = "update" if isinstance(record_id, PersistedId) else "insert"
        try:
            if isinstance(record_id, PersistedId):
                # Zero matched rows is treated as success
                (
                    self.db.query(BankRecord)
                    .filter(BankRecord.id == record_id.value, BankRecord.appraiser_id == actor_id)
                    .update({BankRecord.name: bank.name}, synchronize_session=False)
                )
            else:
                self.db.add(BankRecord(appraiser_id=actor_id, name=bank.name))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("bank", "upsert")
            logger.error(f"Error on bank {action}: {e}", extra={"actor_id": actor_id})
            return False

        record_save("bank", action)
        return True

    def upsert_bank(self, actor_id: str, bank: Bank) -> bool:
        """Save using the shape of ``bank.id`` to pick insert or update"""
        return self.save_bank(actor_id, classify_identifier(bank.id), bank)

    def delete_bank(self, actor_id: str, bank_id: str) -> bool:
        """Delete one bank. Loans that reference it are left untouched."""
        try:
            (
                self.db.query(BankRecord)
                .filter(BankRecord.id == bank_id, BankRecord.appraiser_id == actor_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("bank", "delete")
            logger.error(f"Error deleting bank: {e}", extra={"actor_id": actor_id})
            return False

        records_deleted_counter.labels(entity="bank").inc()
        return True


class LoanRepository:
    """Repository for loan appraisals"""

    def __init__(self, db: Session):
        self.db = db

    def list_loans(self, actor_id: str) -> List[Loan]:
        """
        All loans of the appraiser with the bank name joined in.

        Ordered by date descending, then creation time descending. Loans
        whose bank was deleted, or that point at a bank of another appraiser,
        come back with bank_name None.
        """
        try:
            rows = (
                self.db.query(LoanRecord, BankRecord.name)
                .outerjoin(
                    BankRecord,
                    and_(LoanRecord.bank_id == BankRecord.id, BankRecord.appraiser_id == actor_id),
                )
                .filter(LoanRecord.appraiser_id == actor_id)
                .order_by(LoanRecord.date.desc(), LoanRecord.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("loan", "list")
            logger.error(f"Error fetching loans: {e}", extra={"actor_id": actor_id})
            return []

        return [
            Loan(
                id=loan.id,
                bank_id=loan.bank_id,
                bank_name=bank_name,
                date=loan.date,
                amount=loan.amount,
                customer_name=loan.customer_name,
                notes=loan.notes,
                created_at=loan.created_at,
            )
            for loan, bank_name in rows
        ]

    def save_loan(self, actor_id: str, record_id: RecordId, loan: Loan) -> bool:
        """Insert for a pending id, full field update for a persisted id"""
        action = "update" if isinstance(record_id, PersistedId) else "insert"
        values = {
            "bank_id": loan.bank_id,
            "date": loan.date,
            "amount": loan.amount,
            "customer_name": loan.customer_name,
            "notes": loan.notes,
        }
        try:
            if isinstance(record_id, PersistedId):
                (
                    self.db.query(LoanRecord)
                    .filter(LoanRecord.id == record_id.value, LoanRecord.appraiser_id == actor_id)
                    .update(values, synchronize_session=False)
                )
            else:
                self.db.add(LoanRecord(appraiser_id=actor_id, **values))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("loan", "upsert")
            logger.error(f"Error on loan {action}: {e}", extra={"actor_id": actor_id})
            return False

        record_save("loan", action)
        return True

    def upsert_loan(self, actor_id: str, loan: Loan) -> bool:
        """Save using the shape of ``loan.id`` to pick insert or update"""
        return self.save_loan(actor_id, classify_identifier(loan.id), loan)

    def delete_loan(self, actor_id: str, loan_id: str) -> bool:
        try:
            (
                self.db.query(LoanRecord)
                .filter(LoanRecord.id == loan_id, LoanRecord.appraiser_id == actor_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            record_store_failure("loan", "delete")
            logger.error(f"Error deleting loan: {e}", extra={"actor_id": actor_id})
            return False

        records_deleted_counter.labels(entity="loan").inc()
        return True
