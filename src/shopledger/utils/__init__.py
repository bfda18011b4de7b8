"""Utility functions for shopledger."""

from shopledger.utils.date_parser import parse_date
from shopledger.utils.money import format_amount, parse_amount, parse_positive_amount
from shopledger.utils.resolver import resolve_reference

__all__ = [
    "parse_date",
    "format_amount",
    "parse_amount",
    "parse_positive_amount",
    "resolve_reference",
]
