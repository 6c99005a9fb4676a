"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Union

UNKNOWN_BANK = "Unknown"


@dataclass
class Bank:
    """Partner bank branch"""

    id: str
    name: str
    created_at: Optional[datetime] = None


@dataclass
class Loan:
    """Single gold-loan appraisal entry"""

    id: str
    bank_id: str
    date: date
    amount: Optional[float] = None
    customer_name: Optional[str] = None
    notes: Optional[str] = None
    bank_name: Optional[str] = None  # read-time copy, never written back
    created_at: Optional[datetime] = None


@dataclass
class PeriodStats:
    """Loan count and earnings over one time bucket"""

    count: int
    earnings: float


@dataclass
class BankCount:
    """Loans recorded against one bank on the dashboard"""

    bank_id: str
    bank_name: str
    count: int
    earnings: float


@dataclass
class DashboardStats:
    """Output of dashboard aggregation"""

    today: PeriodStats
    month: PeriodStats
    overall: PeriodStats
    active_banks: int
    bank_wise: List[BankCount]
    fee_per_loan: float


# Report rows: one variant per report mode, each with a fixed field set.


@dataclass
class BankwiseRow:
    label: str
    count: int
    total_amount: float
    salary: float


@dataclass
class MonthlyRow:
    label: str
    count: int
    amount: float
    salary: float


@dataclass
class DailyRow:
    label: str
    amount: float
    salary: float
    bank: str
    customer: Optional[str]
    count: int = 1


ReportRow = Union[BankwiseRow, MonthlyRow, DailyRow]


@dataclass
class ReportTotals:
    """Column-wise sums for the footer row"""

    count: int = 0
    amount: float = 0
    salary: float = 0


@dataclass
class Report:
    """A named tabular view over loans and banks"""

    mode: str
    rows: List[ReportRow]
    totals: ReportTotals
    generated_on: date
    month: Optional[str] = None


@dataclass
class InsightRequest:
    """Aggregate figures handed to the insight text provider"""

    total_count: int
    per_bank: Dict[str, int] = field(default_factory=dict)
    as_of: Optional[date] = None
