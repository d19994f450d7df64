"""Report builders and the storage-backed report service.

The ``build_*`` functions are pure and operate on already-loaded banks and
entries. ``ReportService`` loads what they need through the Database interface.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from bankledger.database.base import Database
from bankledger.domain.balance import ZERO, aggregate, bucket_by_month
from bankledger.domain.entities import (
    BalanceSnapshot,
    Bank,
    DateRange,
    Entry,
    EntryQuery,
    FiscalRange,
    MonthlyReport,
    MonthlyReportTotals,
    ReconciliationResult,
    YearlyReport,
    YearlyReportRow,
    YearlyReportTotals,
)
from bankledger.domain.errors import NotFoundError, bank_not_found
from bankledger.domain.fiscal import fiscal_months, fiscal_range_for, recent_fiscal_ranges
from bankledger.domain.reconciliation import reconcile
from bankledger.domain.settings import SettingsService


def build_yearly_report(
    banks: Sequence[Bank], entries: Iterable[Entry], fiscal_range: FiscalRange
) -> YearlyReport:
    """Build the fiscal year report: one row per bank plus grand totals.

    Each row starts from the bank's opening balance and applies that bank's
    entries dated inside ``fiscal_range``.
    """
    in_range: dict[int, list[Entry]] = {}
    for entry in entries:
        if fiscal_range.contains(entry.date):
            in_range.setdefault(entry.bank_id, []).append(entry)

    rows = []
    for bank in banks:
        bank_entries = in_range.get(bank.id, [])
        snapshot = aggregate(bank.opening_balance, bank_entries)
        rows.append(
            YearlyReportRow(
                bank_id=bank.id,
                bank_name=bank.name,
                opening_balance=bank.opening_balance,
                total_debit=snapshot.total_debit,
                total_credit=snapshot.total_credit,
                final_balance=snapshot.balance,
                entry_count=len(bank_entries),
            )
        )

    totals = YearlyReportTotals(
        opening_balance=sum((row.opening_balance for row in rows), ZERO),
        total_debit=sum((row.total_debit for row in rows), ZERO),
        total_credit=sum((row.total_credit for row in rows), ZERO),
        final_balance=sum((row.final_balance for row in rows), ZERO),
    )
    return YearlyReport(fiscal_range=fiscal_range, rows=tuple(rows), totals=totals)


def build_monthly_report(
    bank: Bank, entries: Iterable[Entry], fiscal_range: FiscalRange
) -> MonthlyReport:
    """Build the monthly comparative report of one bank over a fiscal year.

    Months run in fiscal order from the fiscal start month, so the opening
    balance anchors the first fiscal month. Only the twelve months from
    ``fiscal_months`` are reported: when a mismatched configuration makes the
    range longer, entries after the twelfth month are left out of the buckets
    and the totals.
    """
    bank_entries = [
        entry
        for entry in entries
        if entry.bank_id == bank.id and fiscal_range.contains(entry.date)
    ]
    buckets = bucket_by_month(bank.opening_balance, bank_entries, fiscal_months(fiscal_range))

    totals = MonthlyReportTotals(
        debit=sum((bucket.debit for bucket in buckets), ZERO),
        credit=sum((bucket.credit for bucket in buckets), ZERO),
        final_balance=buckets[-1].balance if buckets else bank.opening_balance,
    )
    return MonthlyReport(
        bank_id=bank.id,
        bank_name=bank.name,
        opening_balance=bank.opening_balance,
        fiscal_range=fiscal_range,
        months=tuple(buckets),
        totals=totals,
    )


def build_bank_summary(
    bank: Bank, entries: Iterable[Entry], date_range: Optional[DateRange] = None
) -> BalanceSnapshot:
    """Summarize one bank over a period.

    The balance carries everything before the period forward, so it is the
    bank's actual balance at the end of the period. Without a period all
    entries are used.
    """
    bank_entries = [entry for entry in entries if entry.bank_id == bank.id]
    if date_range is None:
        return aggregate(bank.opening_balance, bank_entries)

    before = [entry for entry in bank_entries if entry.date < date_range.start_date]
    during = [entry for entry in bank_entries if date_range.contains(entry.date)]
    carried = aggregate(bank.opening_balance, before).balance
    return aggregate(carried, during)


class ReportService:
    """Service that loads ledger data and builds reports from it."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings = SettingsService(db)

    def _require_bank(self, bank_id: int) -> Bank:
        bank = self.db.get_bank(bank_id)
        if bank is None:
            raise NotFoundError(bank_not_found(bank_id))
        return bank

    def fiscal_range(self, reference_date: Optional[date] = None) -> FiscalRange:
        """Return the configured fiscal year containing ``reference_date``.

        Defaults to the fiscal year of today (or of the fixed date override).
        """
        start_month, end_month = self.settings.fiscal_months()
        if reference_date is None:
            reference_date = self.settings.today()
        return fiscal_range_for(reference_date, start_month, end_month)

    def available_fiscal_ranges(self, count: int = 5) -> list[FiscalRange]:
        """Return the current fiscal year and the ``count - 1`` before it."""
        start_month, end_month = self.settings.fiscal_months()
        return recent_fiscal_ranges(self.settings.today(), count, start_month, end_month)

    def yearly_report(self, fiscal_range: Optional[FiscalRange] = None) -> YearlyReport:
        """Build the fiscal year report for all banks."""
        if fiscal_range is None:
            fiscal_range = self.fiscal_range()
        entries = self.db.list_entries(
            EntryQuery(start_date=fiscal_range.start_date, end_date=fiscal_range.end_date)
        )
        return build_yearly_report(self.db.list_banks(), entries, fiscal_range)

    def monthly_report(
        self, bank_id: int, fiscal_range: Optional[FiscalRange] = None
    ) -> MonthlyReport:
        """Build the monthly comparative report for one bank."""
        bank = self._require_bank(bank_id)
        if fiscal_range is None:
            fiscal_range = self.fiscal_range()
        entries = self.db.list_entries(
            EntryQuery(
                bank_id=bank_id,
                start_date=fiscal_range.start_date,
                end_date=fiscal_range.end_date,
            )
        )
        return build_monthly_report(bank, entries, fiscal_range)

    def bank_summary(
        self, bank_id: int, date_range: Optional[DateRange] = None
    ) -> BalanceSnapshot:
        """Summarize one bank over a period (all time when no period is given)."""
        bank = self._require_bank(bank_id)
        end_date = date_range.end_date if date_range is not None else None
        entries = self.db.list_entries(EntryQuery(bank_id=bank_id, end_date=end_date))
        return build_bank_summary(bank, entries, date_range)

    def reconcile(
        self,
        bank_id: int,
        target_date: date,
        statement_balance: Optional[Decimal] = None,
    ) -> ReconciliationResult:
        """Reconcile a bank's end-of-day balance against a statement figure."""
        bank = self._require_bank(bank_id)
        entries = self.db.list_entries(EntryQuery(bank_id=bank_id, end_date=target_date))
        return reconcile(bank, entries, target_date, statement_balance)
