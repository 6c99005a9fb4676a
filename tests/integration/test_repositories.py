"""Integration tests for the bank and loan repositories against SQLite"""

from datetime import date
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from appraisal_ledger.domain.identity import is_persisted_identifier, PendingId
from appraisal_ledger.domain.models import Bank, Loan
from appraisal_ledger.infrastructure.database.repositories import BankRepository, LoanRepository

ACTOR = "appraiser-1"
OTHER = "appraiser-2"


def add_bank(repo: BankRepository, name: str, actor: str = ACTOR) -> Bank:
    assert repo.upsert_bank(actor, Bank(id=f"B-{name}", name=name))
    return next(b for b in repo.list_banks(actor) if b.name == name)


def test_insert_assigns_store_id_and_discards_temporary_one(db: Session):
    repo = BankRepository(db)

    assert repo.upsert_bank(ACTOR, Bank(id="B-1718000000000", name="Alpha"))

    [bank] = repo.list_banks(ACTOR)
    assert bank.name == "Alpha"
    assert bank.id != "B-1718000000000"
    assert is_persisted_identifier(bank.id)
    assert bank.created_at is not None


def test_update_renames_in_place(db: Session):
    repo = BankRepository(db)
    bank = add_bank(repo, "Alpha")

    assert repo.upsert_bank(ACTOR, Bank(id=bank.id, name="Alpha Main"))

    banks = repo.list_banks(ACTOR)
    assert [(b.id, b.name) for b in banks] == [(bank.id, "Alpha Main")]


def test_update_of_missing_id_is_silent_success(db: Session):
    repo = BankRepository(db)

    assert repo.upsert_bank(ACTOR, Bank(id="550e8400-e29b-41d4-a716-446655440000", name="Ghost"))
    assert repo.list_banks(ACTOR) == []


def test_banks_are_scoped_and_sorted_by_name(db: Session):
    repo = BankRepository(db)
    add_bank(repo, "Canara")
    add_bank(repo, "Axis")
    other = add_bank(repo, "Hidden", actor=OTHER)

    assert [b.name for b in repo.list_banks(ACTOR)] == ["Axis", "Canara"]

    # another appraiser's bank can be neither renamed nor deleted
    assert repo.upsert_bank(ACTOR, Bank(id=other.id, name="Hijacked"))
    assert repo.delete_bank(ACTOR, other.id)
    assert [b.name for b in repo.list_banks(OTHER)] == ["Hidden"]


def test_loans_join_bank_name_and_sort_newest_first(db: Session):
    banks = BankRepository(db)
    loans = LoanRepository(db)
    alpha = add_bank(banks, "Alpha")

    loans.upsert_loan(ACTOR, Loan(id="L-1", bank_id=alpha.id, date=date(2024, 5, 1), amount=1000, customer_name="Ravi"))
    loans.upsert_loan(ACTOR, Loan(id="L-2", bank_id=alpha.id, date=date(2024, 5, 2), amount=None))
    loans.upsert_loan(ACTOR, Loan(id="L-3", bank_id=alpha.id, date=date(2024, 5, 2), amount=500, notes="late entry"))

    result = loans.list_loans(ACTOR)

    assert [l.date for l in result] == [date(2024, 5, 2), date(2024, 5, 2), date(2024, 5, 1)]
    # same date: most recently created first
    assert result[0].notes == "late entry"
    assert all(l.bank_name == "Alpha" for l in result)
    assert result[2].customer_name == "Ravi"
    assert result[1].amount is None


def test_loan_update_rewrites_fields(db: Session):
    banks = BankRepository(db)
    loans = LoanRepository(db)
    alpha = add_bank(banks, "Alpha")
    beta = add_bank(banks, "Beta")
    loans.upsert_loan(ACTOR, Loan(id="", bank_id=alpha.id, date=date(2024, 5, 1)))
    [loan] = loans.list_loans(ACTOR)

    assert loans.upsert_loan(
        ACTOR,
        Loan(id=loan.id, bank_id=beta.id, date=date(2024, 5, 3), amount=1200, customer_name="Asha"),
    )

    [updated] = loans.list_loans(ACTOR)
    assert updated.id == loan.id
    assert updated.bank_name == "Beta"
    assert updated.date == date(2024, 5, 3)
    assert updated.amount == 1200


def test_deleting_bank_leaves_orphan_loans(db: Session):
    banks = BankRepository(db)
    loans = LoanRepository(db)
    alpha = add_bank(banks, "Alpha")
    loans.upsert_loan(ACTOR, Loan(id="", bank_id=alpha.id, date=date(2024, 5, 1)))

    assert banks.delete_bank(ACTOR, alpha.id)

    [orphan] = loans.list_loans(ACTOR)
    assert orphan.bank_id == alpha.id
    assert orphan.bank_name is None


def test_delete_loan(db: Session):
    banks = BankRepository(db)
    loans = LoanRepository(db)
    alpha = add_bank(banks, "Alpha")
    loans.upsert_loan(ACTOR, Loan(id="", bank_id=alpha.id, date=date(2024, 5, 1)))
    [loan] = loans.list_loans(ACTOR)

    assert loans.delete_loan(OTHER, loan.id)
    assert len(loans.list_loans(ACTOR)) == 1

    assert loans.delete_loan(ACTOR, loan.id)
    assert loans.list_loans(ACTOR) == []


def test_store_failures_are_swallowed():
    """Errors roll back and surface only as False / empty list"""
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))
    session.query.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

    banks = BankRepository(session)
    loans = LoanRepository(session)

    assert banks.save_bank(ACTOR, PendingId(), Bank(id="", name="Alpha")) is False
    assert loans.upsert_loan(ACTOR, Loan(id="", bank_id="b1", date=date(2024, 5, 1))) is False
    assert banks.delete_bank(ACTOR, "b1") is False
    assert banks.list_banks(ACTOR) == []
    assert loans.list_loans(ACTOR) == []
    assert session.rollback.call_count == 5


def test_loan_pointing_at_another_appraisers_bank_gets_no_name(db: Session):
    banks = BankRepository(db)
    loans = LoanRepository(db)
    secret = add_bank(banks, "SecretBank", actor=OTHER)
    loans.upsert_loan(ACTOR, Loan(id="", bank_id=secret.id, date=date(2024, 5, 2)))

    [loan] = loans.list_loans(ACTOR)

    assert loan.bank_id == secret.id
    assert loan.bank_name is None
