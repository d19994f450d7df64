"""Fiscal period calculations.

A fiscal year is described by a start month and an end month (July to June by
default). Every range is inclusive of its last calendar day.
"""

from calendar import monthrange
from datetime import date
import re

from dateutil.relativedelta import relativedelta

from bankledger.domain.entities import DateRange, FiscalRange

DEFAULT_FISCAL_START_MONTH = 7
DEFAULT_FISCAL_END_MONTH = 6

_LABEL_PATTERN = re.compile(r"^\s*(\d{4})\s*[/-]\s*(\d{4})\s*$")


def _last_day(year: int, month: int) -> date:
    return date(year, month, monthrange(year, month)[1])


def fiscal_range_for(
    reference_date: date,
    start_month: int = DEFAULT_FISCAL_START_MONTH,
    end_month: int = DEFAULT_FISCAL_END_MONTH,
) -> FiscalRange:
    """Return the fiscal year containing ``reference_date``.

    The year begins in the reference year when the reference month is on or
    after ``start_month``, otherwise in the previous year, and ends the year
    after it begins. The end date is the last day of ``end_month`` in that end
    year. The two months are not checked against each other, so a configuration
    whose end month is not the month before the start month gives a range that
    is not twelve months long.

    Args:
        reference_date: Any day inside the wanted fiscal year
        start_month: First month of the fiscal year (1-12)
        end_month: Last month of the fiscal year (1-12)

    Returns:
        FiscalRange with inclusive start/end dates and a "YYYY/YYYY" label
    """
    if reference_date.month >= start_month:
        begin_year = reference_date.year
    else:
        begin_year = reference_date.year - 1
    end_year = begin_year + 1

    return FiscalRange(
        start_date=date(begin_year, start_month, 1),
        end_date=_last_day(end_year, end_month),
        label=f"{begin_year}/{end_year}",
    )


def month_range(year: int, month: int) -> DateRange:
    """Return the first through last day of a calendar month (month is 1-12)."""
    return DateRange(start_date=date(year, month, 1), end_date=_last_day(year, month))


def fiscal_months(fiscal_range: DateRange) -> list[tuple[int, int]]:
    """Return the 12 (year, month) pairs of a fiscal year in fiscal order.

    The months always start at the range's first month and run for twelve
    months, whatever the end date. With a mismatched configuration (start 1,
    end 6 spans eighteen months) the months past the twelfth are not listed.
    """
    first = fiscal_range.start_date.replace(day=1)
    months = []
    for offset in range(12):
        current = first + relativedelta(months=offset)
        months.append((current.year, current.month))
    return months


def recent_fiscal_ranges(
    reference_date: date,
    count: int = 5,
    start_month: int = DEFAULT_FISCAL_START_MONTH,
    end_month: int = DEFAULT_FISCAL_END_MONTH,
) -> list[FiscalRange]:
    """Return the fiscal year of ``reference_date`` and the ones before it, newest first."""
    return [
        fiscal_range_for(reference_date - relativedelta(years=offset), start_month, end_month)
        for offset in range(count)
    ]


def parse_fiscal_label(
    label: str,
    start_month: int = DEFAULT_FISCAL_START_MONTH,
    end_month: int = DEFAULT_FISCAL_END_MONTH,
) -> FiscalRange:
    """Resolve a label such as "2023/2024" (or "2023-2024") to its fiscal range.

    Raises:
        ValueError: If the label is malformed or the years are not consecutive
    """
    match = _LABEL_PATTERN.match(label)
    if match is None:
        raise ValueError(f"Invalid fiscal year '{label}'. Expected a label like 2023/2024")
    begin_year, end_year = int(match.group(1)), int(match.group(2))
    if end_year != begin_year + 1:
        raise ValueError(f"Invalid fiscal year '{label}': years must be consecutive")
    return fiscal_range_for(date(begin_year, start_month, 1), start_month, end_month)
