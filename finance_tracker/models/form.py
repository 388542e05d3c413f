"""
Form Models for the Finance Tracker

Transient, never-persisted state behind the add/edit form, plus the
validation result the form produces on submit.
"""

from enum import Enum

from pydantic import BaseModel, Field

from finance_tracker.models.transaction import (
    TransactionType,
    default_category,
)


class FormState(str, Enum):
    """
    Edit mode of the form.

    IDLE: fields hold defaults (or whatever the user is typing for a new
    record). EDITING: fields were pre-populated from an existing record.
    """
    IDLE = "idle"
    EDITING = "editing"


class ActiveTab(str, Enum):
    """Top-level views of the app."""
    DASHBOARD = "dashboard"
    ADD = "add"


class FormFields(BaseModel):
    """
    Raw form input, exactly as typed.

    Amount stays a string here; it is only parsed when the form is
    submitted.
    """

    description: str = ""
    amount: str = ""
    type: TransactionType = TransactionType.EXPENSE
    category: str = Field(
        default_factory=lambda: default_category(TransactionType.EXPENSE)
    )


class ValidationIssue(BaseModel):
    """A single validation issue found on submit."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """Outcome of validating the form before it reaches the store."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.issues)

    def issues_for(self, field: str) -> list[ValidationIssue]:
        """Issues attached to one form field."""
        return [issue for issue in self.issues if issue.field == field]
