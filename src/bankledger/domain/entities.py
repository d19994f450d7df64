"""Domain model entities for bankledger.

These are pure data classes representing ledger concepts, independent of
database schema. Stored entities (Bank, Entry) come back from the storage layer;
the remaining classes are derived values computed per query and never persisted.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class EntryType(str, Enum):
    """Direction of a ledger entry.

    Debits increase a bank's balance and credits decrease it (cash-ledger
    convention).
    """

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class Bank:
    """Bank account domain entity."""

    id: int
    name: str
    iban: Optional[str]
    opening_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Entry:
    """Debit or credit entry posted against a bank."""

    id: int
    bank_id: int
    type: EntryType
    description: str
    date: date
    amount: Decimal


@dataclass(frozen=True)
class EntryQuery:
    """Filter for entry lookups.

    All fields are optional; date bounds are inclusive.
    """

    bank_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    entry_type: Optional[EntryType] = None

    def matches(self, entry: Entry) -> bool:
        """Return True if the entry satisfies every filter that is set."""
        if self.bank_id is not None and entry.bank_id != self.bank_id:
            return False
        if self.entry_type is not None and entry.type != self.entry_type:
            return False
        if self.start_date is not None and entry.date < self.start_date:
            return False
        if self.end_date is not None and entry.date > self.end_date:
            return False
        return True


@dataclass(frozen=True)
class BalanceSnapshot:
    """Totals and resulting balance for a set of entries."""

    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start_date: date
    end_date: date

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date


@dataclass(frozen=True)
class FiscalRange(DateRange):
    """Fiscal year range with a label such as ``2023/2024``."""

    label: str = ""


@dataclass(frozen=True)
class MonthBucket:
    """Debit/credit totals of one calendar month plus the running balance."""

    month: int
    year: int
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class ReconciliationResult:
    """Expected end-of-day balance compared to a bank statement figure.

    ``difference`` and ``matched`` are None when no statement balance was given.
    """

    bank_id: int
    target_date: date
    opening_balance: Decimal
    net_change: Decimal
    system_balance: Decimal
    statement_balance: Optional[Decimal] = None
    difference: Optional[Decimal] = None
    matched: Optional[bool] = None


@dataclass(frozen=True)
class YearlyReportRow:
    """Per-bank row of the fiscal year report."""

    bank_id: int
    bank_name: str
    opening_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    final_balance: Decimal
    entry_count: int


@dataclass(frozen=True)
class YearlyReportTotals:
    """Grand totals across all banks of the fiscal year report."""

    opening_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    final_balance: Decimal


@dataclass(frozen=True)
class YearlyReport:
    """Fiscal year report for all banks."""

    fiscal_range: FiscalRange
    rows: tuple[YearlyReportRow, ...]
    totals: YearlyReportTotals


@dataclass(frozen=True)
class MonthlyReportTotals:
    """Totals row of the monthly comparative report."""

    debit: Decimal
    credit: Decimal
    final_balance: Decimal


@dataclass(frozen=True)
class MonthlyReport:
    """Monthly comparative report for one bank over a fiscal year."""

    bank_id: int
    bank_name: str
    opening_balance: Decimal
    fiscal_range: FiscalRange
    months: tuple[MonthBucket, ...]
    totals: MonthlyReportTotals
