"""
Form Validation

Checks raw form input before anything reaches the store.

Rules:
- Description must be non-empty (after stripping whitespace) and fit
  the stored length limit
- Amount must parse as a finite number
- Amount must be greater than zero
- Amount must be whole cents and fit the stored digit limit
- Category must belong to the list for the selected type

IMPORTANT: Validation NEVER fixes input.
It reports issues; the controller decides to reject the submission.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from finance_tracker.models.form import (
    FormFields,
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.transaction import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    DESCRIPTION_MAX_LENGTH,
    categories_for,
)

MAX_INTEGER_DIGITS = AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES


def parse_amount(raw: str) -> Optional[Decimal]:
    """
    Parse an amount typed by the user.

    Returns:
        The Decimal value, or None if the text is not a finite number
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def _amount_issue(amount: Optional[Decimal]) -> Optional[ValidationIssue]:
    if amount is None:
        return ValidationIssue(
            field="amount",
            issue_type="not_a_number",
            message="Amount must be a number",
        )
    if amount <= 0:
        return ValidationIssue(
            field="amount",
            issue_type="not_positive",
            message="Amount must be greater than zero",
        )

    # Trailing zeros do not count: "4.500" is still 4.50
    normalized = amount.normalize()
    if -normalized.as_tuple().exponent > AMOUNT_DECIMAL_PLACES:
        return ValidationIssue(
            field="amount",
            issue_type="too_precise",
            message=f"Amount can have at most {AMOUNT_DECIMAL_PLACES} decimal places",
        )
    if normalized.adjusted() + 1 > MAX_INTEGER_DIGITS:
        return ValidationIssue(
            field="amount",
            issue_type="too_large",
            message=f"Amount can have at most {MAX_INTEGER_DIGITS} digits before the decimal point",
        )
    return None


class TransactionFormValidator:
    """Validates FormFields on submit."""

    def validate(self, fields: FormFields) -> ValidationResult:
        """
        Validate the form.

        Returns:
            ValidationResult listing every issue found
        """
        issues: list[ValidationIssue] = []

        description = fields.description.strip()
        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Please enter a description",
            ))
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description can be at most {DESCRIPTION_MAX_LENGTH} characters",
            ))

        amount_issue = _amount_issue(parse_amount(fields.amount))
        if amount_issue is not None:
            issues.append(amount_issue)

        allowed = categories_for(fields.type)
        if fields.category not in allowed:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_for_type",
                message=f"Choose one of: {', '.join(allowed)}",
            ))

        return ValidationResult(is_valid=not issues, issues=issues)
