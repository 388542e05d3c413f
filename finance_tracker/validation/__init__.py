"""Validation package."""

from finance_tracker.validation.validator import TransactionFormValidator, parse_amount

__all__ = ["TransactionFormValidator", "parse_amount"]
