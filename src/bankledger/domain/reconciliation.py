"""Day-level reconciliation against a bank statement balance."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from bankledger.domain.balance import aggregate, net_change
from bankledger.domain.entities import Bank, Entry, ReconciliationResult

# Float-derived statement figures can drift by fractions of a cent.
RECONCILIATION_TOLERANCE = Decimal("0.01")


def reconcile(
    bank: Bank,
    entries: Iterable[Entry],
    target_date: date,
    statement_balance: Optional[Decimal] = None,
) -> ReconciliationResult:
    """Compute the expected end-of-day balance and compare it to a statement.

    The opening balance for the day is the bank's opening balance plus every
    entry dated before ``target_date``; the day's own entries are then added.
    Entries of other banks and entries after ``target_date`` are ignored.

    Args:
        bank: Bank being reconciled
        entries: Entries of the bank (any date)
        target_date: Day to reconcile
        statement_balance: Balance reported by the bank for the end of that day

    Returns:
        ReconciliationResult; ``difference`` and ``matched`` stay None when
        no statement balance is given
    """
    prior = []
    same_day = []
    for entry in entries:
        if entry.bank_id != bank.id:
            continue
        if entry.date < target_date:
            prior.append(entry)
        elif entry.date == target_date:
            same_day.append(entry)

    opening_for_day = aggregate(bank.opening_balance, prior).balance
    day_change = net_change(same_day)
    system_balance = opening_for_day + day_change

    difference = None
    matched = None
    if statement_balance is not None:
        statement_balance = Decimal(str(statement_balance))
        difference = statement_balance - system_balance
        matched = abs(difference) < RECONCILIATION_TOLERANCE

    return ReconciliationResult(
        bank_id=bank.id,
        target_date=target_date,
        opening_balance=opening_for_day,
        net_change=day_change,
        system_balance=system_balance,
        statement_balance=statement_balance,
        difference=difference,
        matched=matched,
    )
