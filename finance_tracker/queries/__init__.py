"""Derived view package."""

from finance_tracker.queries.views import (
    balance,
    expenses_by_category,
    summarize,
    total_expenses,
    total_income,
)

__all__ = [
    "balance",
    "expenses_by_category",
    "summarize",
    "total_expenses",
    "total_income",
]
