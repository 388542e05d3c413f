"""
Core Transaction Model for the Finance Tracker

A Transaction is the only entity we persist. The model enforces the
invariants every stored record must satisfy:
1. Description is non-empty
2. Amount is strictly positive
3. Category belongs to the list implied by the transaction type

DESIGN DECISION: Amounts are Decimal, not float.
Totals and balances are then exact, which matters when the user
compares the dashboard against a bank statement.
"""

from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import Annotated
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    TypeAdapter,
    model_validator,
)


# =============================================================================
# ENUMS AND CATEGORY SETS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Housing",
    "Transportation",
    "Entertainment",
    "Utilities",
    "Healthcare",
    "Shopping",
    "Other",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investments",
    "Gifts",
    "Other",
)


def categories_for(transaction_type: TransactionType) -> tuple[str, ...]:
    """Get the category list that is valid for a transaction type."""
    if TransactionType(transaction_type) == TransactionType.EXPENSE:
        return EXPENSE_CATEGORIES
    return INCOME_CATEGORIES


def default_category(transaction_type: TransactionType) -> str:
    """First category of the list for the given type."""
    return categories_for(transaction_type)[0]


def new_transaction_id() -> str:
    """
    Generate a fresh transaction ID.

    IDs are random, so a deleted record's ID is never handed out again.
    """
    return uuid4().hex


# Amounts are whole cents with at most ten integer digits. Every such value
# survives the trip through a JSON number unchanged.
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 2
CENT = Decimal("0.01")

DESCRIPTION_MAX_LENGTH = 500

Amount = Annotated[
    Decimal,
    Field(
        gt=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Amount in currency units (must be positive)",
    ),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# =============================================================================
# TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    Records are immutable. Editing a transaction means replacing it
    wholesale with a new record carrying the same ID.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        default_factory=new_transaction_id,
        min_length=1,
        description="Opaque unique identifier",
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="What this transaction was for",
    )
    amount: Amount
    type: TransactionType = Field(
        ...,
        description="Income or expense",
    )
    category: str = Field(
        ...,
        description="Category from the list matching the type",
    )
    date: Date = Field(
        default_factory=Date.today,
        description="Calendar date the transaction was recorded",
    )

    @model_validator(mode="after")
    def validate_category(self) -> "Transaction":
        """Category must come from the list implied by the type."""
        allowed = categories_for(self.type)
        if self.category not in allowed:
            raise ValueError(
                f"Category '{self.category}' is not valid for {self.type.value} "
                f"transactions. Allowed: {', '.join(allowed)}"
            )
        return self

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """Amount with sign applied (negative for expenses)."""
        return self.amount if self.is_income else -self.amount


# Serialization for the persisted collection (a JSON array of records).
TRANSACTION_LIST_ADAPTER = TypeAdapter(list[Transaction])
