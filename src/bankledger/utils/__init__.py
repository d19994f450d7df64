"""Utility functions for bankledger."""

from bankledger.utils.date_parser import parse_date, parse_iso_date, format_date
from bankledger.utils.money import parse_amount, parse_money, format_money
from bankledger.utils.bank_resolver import resolve_bank

__all__ = [
    "parse_date",
    "parse_iso_date",
    "format_date",
    "parse_amount",
    "parse_money",
    "format_money",
    "resolve_bank",
]
