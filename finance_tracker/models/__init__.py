"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TRANSACTION_LIST_ADAPTER,
    Transaction,
    TransactionType,
    categories_for,
    default_category,
    new_transaction_id,
)
from finance_tracker.models.form import (
    ActiveTab,
    FormFields,
    FormState,
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.summary import (
    CategoryTotal,
    FinancialSummary,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "TRANSACTION_LIST_ADAPTER",
    "Transaction",
    "TransactionType",
    "categories_for",
    "default_category",
    "new_transaction_id",
    # Form models
    "ActiveTab",
    "FormFields",
    "FormState",
    "ValidationIssue",
    "ValidationResult",
    # Summary models
    "CategoryTotal",
    "FinancialSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
