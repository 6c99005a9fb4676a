"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union


class BankIn(BaseModel):
    """Request body for creating or renaming a bank"""

    id: Optional[str] = Field(None, description="Persisted id, or a temporary client token")
    name: str = Field(..., min_length=1, description="Branch display name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class BankOut(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None


class LoanIn(BaseModel):
    """Request body for creating or updating a loan appraisal"""

    id: Optional[str] = Field(None, description="Persisted id, or a temporary client token")
    bank_id: str = Field(..., min_length=1)
    date: date
    amount: Optional[float] = Field(None, ge=0, description="Appraised value, null if not yet valued")
    customer_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("bank_id", mode="before")
    @classmethod
    def strip_bank_id(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoanOut(BaseModel):
    id: str
    bank_id: str
    bank_name: Optional[str] = None
    date: date
    amount: Optional[float] = None
    customer_name: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class SaveResponse(BaseModel):
    """Outcome of a save or delete; failures carry no store detail"""

    success: bool


class PeriodSchema(BaseModel):
    count: int
    earnings: float


class BankCountSchema(BaseModel):
    bank_id: str
    bank_name: str
    count: int
    earnings: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    today: PeriodSchema
    month: PeriodSchema
    overall: PeriodSchema
    active_banks: int
    bank_wise: List[BankCountSchema]
    fee_per_loan: float
    currency_symbol: str


class InsightResponse(BaseModel):
    """Response for GET /v1/dashboard/insight"""

    text: str
    fallback: bool


class BankwiseRowSchema(BaseModel):
    label: str
    count: int
    total_amount: float
    salary: float


class MonthlyRowSchema(BaseModel):
    """One day of the month; label is the ISO date"""

    label: str
    count: int
    amount: float
    salary: float


class DailyRowSchema(BaseModel):
    """One loan dated today; label is the loan id"""

    label: str
    count: int
    amount: float
    salary: float
    bank: str
    customer: Optional[str] = None


class ReportTotalsSchema(BaseModel):
    count: int
    amount: float
    salary: float


class BankwiseReportResponse(BaseModel):
    mode: Literal["bankwise"]
    report_date: date
    rows: List[BankwiseRowSchema]
    totals: ReportTotalsSchema


class MonthlyReportResponse(BaseModel):
    mode: Literal["monthly"]
    month: str
    report_date: date
    rows: List[MonthlyRowSchema]
    totals: ReportTotalsSchema


class DailyReportResponse(BaseModel):
    mode: Literal["daily"]
    report_date: date
    rows: List[DailyRowSchema]
    totals: ReportTotalsSchema


# Response for GET /v1/reports/{mode}, tagged by mode
ReportResponse = Annotated[
    Union[BankwiseReportResponse, MonthlyReportResponse, DailyReportResponse],
    Field(discriminator="mode"),
]
