"""Pytest fixtures for testing"""

import os

# Settings are read at import time, point them at SQLite before anything loads
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("INSIGHT_API_KEY", "")

import pytest
from datetime import date, datetime
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from appraisal_ledger.api.main import create_app
from appraisal_ledger.api.dependencies import get_insight_client, get_today
from appraisal_ledger.infrastructure.database.models import Base
from appraisal_ledger.infrastructure.database.session import get_db
from appraisal_ledger.domain.models import Bank, Loan


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 5, 2)
ACTOR = "appraiser-1"


class FakeInsightClient:
    """Stands in for InsightClient; records the request it was given"""

    def __init__(self, text: str = "Workload is well balanced.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.requests = []

    async def summarize(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def insight_client() -> FakeInsightClient:
    return FakeInsightClient()


@pytest.fixture
def client(db: Session, insight_client: FakeInsightClient) -> TestClient:
    """Create FastAPI test client with test database, a fixed date and a fake insight API"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_insight_client] = lambda: insight_client
    return TestClient(app, headers={"X-Appraiser-ID": ACTOR})


@pytest.fixture
def sample_banks() -> list[Bank]:
    return [
        Bank(id="b1", name="Alpha"),
        Bank(id="b2", name="Beta"),
    ]


@pytest.fixture
def sample_loans() -> list[Loan]:
    """Three May 2024 loans: two at Alpha, one at Beta"""
    return [
        Loan(id="l1", bank_id="b1", bank_name="Alpha", date=date(2024, 5, 1), amount=1000,
             customer_name="Ravi", created_at=datetime(2024, 5, 1, 10, 0)),
        Loan(id="l2", bank_id="b1", bank_name="Alpha", date=date(2024, 5, 2), amount=2000,
             customer_name="Meena", created_at=datetime(2024, 5, 2, 9, 0)),
        Loan(id="l3", bank_id="b2", bank_name="Beta", date=date(2024, 5, 2), amount=500,
             customer_name=None, created_at=datetime(2024, 5, 2, 11, 0)),
    ]
