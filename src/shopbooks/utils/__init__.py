"""Utility functions for shopbooks."""

from shopbooks.utils.date_parser import parse_date
from shopbooks.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
