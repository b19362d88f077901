"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import parse_date, parse_statement_date
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.text import clean_description

__all__ = ["parse_date", "parse_statement_date", "parse_amount", "clean_description"]
