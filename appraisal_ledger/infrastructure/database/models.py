"""SQLAlchemy ORM models for banks and loan appraisals"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, DateTime, Date, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BankRecord(Base):
    """Partner bank branch owned by one appraiser"""

    __tablename__ = "banks"

    id = Column(String(36), primary_key=True, default=new_id)
    appraiser_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class LoanRecord(Base):
    """Loan appraisal entry.

    bank_id has no foreign key: deleting a bank leaves its loans in place
    as orphans.
    """

    __tablename__ = "loans"

    id = Column(String(36), primary_key=True, default=new_id)
    appraiser_id = Column(Text, nullable=False, index=True)
    bank_id = Column(Text, nullable=False, index=True)
    date = Column(Date, nullable=False)
    amount = Column(Float, nullable=True)
    customer_name = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
