"""Balance aggregation over ledger entries.

All functions here are pure: they take an opening balance and a collection of
entries and return new values. Results are always recomputed from the entries,
never patched incrementally.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from bankledger.domain.entities import (
    BalanceSnapshot,
    Entry,
    EntryQuery,
    EntryType,
    MonthBucket,
)

ZERO = Decimal("0")


def aggregate(opening_balance: Decimal, entries: Iterable[Entry]) -> BalanceSnapshot:
    """Sum debits and credits and derive the resulting balance.

    ``balance = opening_balance + total_debit - total_credit``. The result does
    not depend on the order of ``entries``.
    """
    total_debit = ZERO
    total_credit = ZERO
    for entry in entries:
        if entry.type == EntryType.DEBIT:
            total_debit += entry.amount
        else:
            total_credit += entry.amount

    opening = Decimal(opening_balance or 0)
    return BalanceSnapshot(
        total_debit=total_debit,
        total_credit=total_credit,
        balance=opening + total_debit - total_credit,
    )


def net_change(entries: Iterable[Entry]) -> Decimal:
    """Return debits minus credits over ``entries``."""
    return aggregate(ZERO, entries).balance


def filter_entries(entries: Iterable[Entry], query: Optional[EntryQuery]) -> list[Entry]:
    """Apply an entry query to an in-memory collection."""
    if query is None:
        return list(entries)
    return [entry for entry in entries if query.matches(entry)]


def bucket_by_month(
    opening_balance: Decimal,
    entries: Iterable[Entry],
    months: Sequence[tuple[int, int]],
) -> list[MonthBucket]:
    """Aggregate entries per month and carry a running balance forward.

    ``months`` is an ordered sequence of (year, month) pairs, normally the 12
    months of a fiscal year starting at the fiscal start month. The running
    balance is chained in exactly that order, starting from ``opening_balance``.
    Entries dated outside the listed months are ignored.
    """
    grouped: dict[tuple[int, int], list[Entry]] = defaultdict(list)
    for entry in entries:
        grouped[(entry.date.year, entry.date.month)].append(entry)

    buckets = []
    running = Decimal(opening_balance or 0)
    for year, month in months:
        snapshot = aggregate(running, grouped.get((year, month), ()))
        running = snapshot.balance
        buckets.append(
            MonthBucket(
                month=month,
                year=year,
                debit=snapshot.total_debit,
                credit=snapshot.total_credit,
                balance=running,
            )
        )
    return buckets
