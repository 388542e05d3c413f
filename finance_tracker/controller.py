"""
Form/Edit Controller

Mediates between the add/edit form and the transaction store.

The form is a two-state machine:

    IDLE --start_edit(id)--> EDITING(id)
    EDITING(id) --cancel_edit()--> IDLE
    EDITING(id) --submit() ok--> IDLE
    IDLE --submit() ok--> IDLE

Invalid submissions are rejected without touching the store or the
form fields. The reason is available from last_validation.
"""

from datetime import date
from typing import Callable, Optional

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEvent, AuditEventBuilder
from finance_tracker.models.form import (
    ActiveTab,
    FormFields,
    FormState,
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.transaction import (
    CENT,
    Transaction,
    TransactionType,
    categories_for,
    default_category,
    new_transaction_id,
)
from finance_tracker.store import TransactionStore
from finance_tracker.validation import TransactionFormValidator, parse_amount


def format_amount_for_input(transaction: Transaction) -> str:
    """Render a stored amount the way the user would type it."""
    return format(transaction.amount.normalize(), "f")


class FormController:
    """
    Holds transient form state and turns submissions into store calls.

    Nothing here is persisted; only the store writes to storage.
    """

    def __init__(
        self,
        store: TransactionStore,
        validator: Optional[TransactionFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Callable[[], date] = date.today,
        restamp_date_on_edit: bool = False,
    ):
        """
        Args:
            store: The transaction store to write to
            validator: Form validator (default TransactionFormValidator)
            audit_logger: Where to record form events
            today: Clock used to date new (and re-stamped) transactions
            restamp_date_on_edit: If True, an edited transaction gets
                                  today's date instead of keeping its own
        """
        self._store = store
        self._validator = validator or TransactionFormValidator()
        self._audit_logger = audit_logger
        self._today = today
        self._restamp_date_on_edit = restamp_date_on_edit

        self._fields = FormFields()
        self._editing_id: Optional[str] = None
        self._active_tab = ActiveTab.DASHBOARD
        self._last_validation: Optional[ValidationResult] = None

    def _audit(self, event: AuditEvent) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return FormState.EDITING if self._editing_id is not None else FormState.IDLE

    @property
    def editing_id(self) -> Optional[str]:
        return self._editing_id

    @property
    def is_editing(self) -> bool:
        return self.state == FormState.EDITING

    @property
    def fields(self) -> FormFields:
        """Copy of the current field values."""
        return self._fields.model_copy()

    @property
    def active_tab(self) -> ActiveTab:
        return self._active_tab

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        """Why the most recent submit stored nothing, if it did not."""
        return self._last_validation

    @property
    def category_options(self) -> tuple[str, ...]:
        """Categories the user may pick for the current type."""
        return categories_for(self._fields.type)

    # ------------------------------------------------------------------
    # Field events
    # ------------------------------------------------------------------

    def set_description(self, description: str) -> None:
        self._fields.description = description

    def set_amount(self, amount: str) -> None:
        self._fields.amount = amount

    def set_category(self, category: str) -> None:
        self._fields.category = category

    def change_type(self, new_type: TransactionType) -> None:
        """
        Switch between income and expense.

        The category always resets to the first entry for the new type,
        so it can never be left pointing at the other type's list.
        """
        new_type = TransactionType(new_type)
        self._fields.type = new_type
        self._fields.category = default_category(new_type)

    def switch_tab(self, tab: ActiveTab) -> None:
        self._active_tab = ActiveTab(tab)

    def _reset_fields(self) -> None:
        self._fields = FormFields()
        self._last_validation = None

    # ------------------------------------------------------------------
    # Edit lifecycle
    # ------------------------------------------------------------------

    def start_edit(self, transaction_id: str) -> bool:
        """
        Load a transaction into the form and show the edit view.

        Returns:
            False if no transaction has that ID (nothing changes)
        """
        transaction = self._store.get(transaction_id)
        if transaction is None:
            self._audit(AuditEventBuilder.target_not_found(transaction_id, "edit"))
            return False

        self._editing_id = transaction.id
        self._fields = FormFields(
            description=transaction.description,
            amount=format_amount_for_input(transaction),
            type=transaction.type,
            category=transaction.category,
        )
        self._last_validation = None
        self._active_tab = ActiveTab.ADD
        self._audit(AuditEventBuilder.edit_started(transaction.id))
        return True

    def cancel_edit(self) -> None:
        """Discard changes and return to IDLE with default fields."""
        if self._editing_id is not None:
            self._audit(AuditEventBuilder.edit_cancelled(self._editing_id))
        self._editing_id = None
        self._reset_fields()

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    def submit(self) -> Optional[Transaction]:
        """
        Validate the form and write it to the store.

        In IDLE a new transaction is added. In EDITING the edited
        transaction is replaced under its original ID.

        Returns:
            The stored transaction, or None if validation rejected it or
            the transaction being edited no longer exists (see last_validation)

        Raises:
            StorageError: If the store cannot persist. Fields and state
                          are left as they were.
        """
        validation = self._validator.validate(self._fields)
        if not validation.is_valid:
            self._last_validation = validation
            self._audit(AuditEventBuilder.validation_rejected(
                [issue.model_dump() for issue in validation.issues]
            ))
            return None

        amount = parse_amount(self._fields.amount).quantize(CENT)

        if self._editing_id is not None:
            transaction = Transaction(
                id=self._editing_id,
                description=self._fields.description,
                amount=amount,
                type=self._fields.type,
                category=self._fields.category,
                date=self._edit_date(self._editing_id),
            )
            if not self._store.update(self._editing_id, transaction):
                # Deleted while the form was open; nothing to update
                self._editing_id = None
                self._reset_fields()
                self._last_validation = ValidationResult(
                    is_valid=False,
                    issues=[ValidationIssue(
                        field="transaction",
                        issue_type="not_found",
                        message="This transaction no longer exists",
                    )],
                )
                return None
        else:
            transaction = Transaction(
                id=new_transaction_id(),
                description=self._fields.description,
                amount=amount,
                type=self._fields.type,
                category=self._fields.category,
                date=self._today(),
            )
            self._store.add(transaction)

        self._editing_id = None
        self._reset_fields()
        return transaction

    def _edit_date(self, transaction_id: str) -> date:
        """Date for an edited record: the original one unless re-stamping."""
        if self._restamp_date_on_edit:
            return self._today()
        original = self._store.get(transaction_id)
        return original.date if original is not None else self._today()
