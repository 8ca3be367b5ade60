"""Utility functions for logibase."""

from logibase.utils.date_parser import parse_date

__all__ = ["parse_date"]
