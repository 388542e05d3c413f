"""
Derived Views

DESIGN DECISION: Every value here is a pure function of the transaction
collection and is recomputed from scratch on each call.
There is no cache to invalidate; a full scan of a few hundred records
is instant.

All sums use Decimal, so:
- total_income - total_expenses == balance, exactly
- sum(expenses_by_category.values()) == total_expenses, exactly
"""

from decimal import Decimal
from typing import Iterable

from finance_tracker.models.summary import CategoryTotal, FinancialSummary
from finance_tracker.models.transaction import Transaction, TransactionType

ZERO = Decimal("0")


def _sum_of_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.type == transaction_type),
        ZERO,
    )


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all income amounts."""
    return _sum_of_type(transactions, TransactionType.INCOME)


def total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all expense amounts."""
    return _sum_of_type(transactions, TransactionType.EXPENSE)


def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Income minus expenses. May be negative."""
    transactions = list(transactions)
    return total_income(transactions) - total_expenses(transactions)


def expenses_by_category(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Summed expense amounts per category.

    Keys appear in order of each category's first expense in the
    collection. Income records are ignored, and a category with no
    expenses is simply absent.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        totals[transaction.category] = (
            totals.get(transaction.category, ZERO) + transaction.amount
        )
    return totals


def summarize(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Compute every dashboard value in one pass over a snapshot."""
    transactions = list(transactions)
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    by_category = expenses_by_category(transactions)

    breakdown = [
        CategoryTotal(
            name=name,
            value=value,
            share=(value / expenses) if expenses else ZERO,
        )
        for name, value in by_category.items()
    ]

    return FinancialSummary(
        transaction_count=len(transactions),
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        breakdown=breakdown,
    )
