"""
Application Wiring for the Finance Tracker

Builds the storage backend, the transaction store, the audit logger and
the form controller from settings, and loads the stored transactions.

DESIGN DECISION: There are no module-level singletons.
The presentation layer asks for components once and holds on to them.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, get_settings
from finance_tracker.controller import FormController
from finance_tracker.models.summary import FinancialSummary
from finance_tracker.queries import summarize
from finance_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from finance_tracker.store import TransactionStore


@dataclass
class AppComponents:
    """
    Everything the presentation layer needs.

    storage, store and audit_logger are shared by every user session.
    Form state is not: each session gets its own controller from
    new_controller().
    """

    storage: KeyValueStorageInterface
    store: TransactionStore
    audit_logger: AuditLogger
    today: Callable[[], date] = date.today
    restamp_date_on_edit: bool = False
    controller: FormController = field(init=False)

    def __post_init__(self):
        self.controller = self.new_controller()

    def new_controller(self) -> FormController:
        """Fresh form controller bound to the shared store."""
        return FormController(
            store=self.store,
            audit_logger=self.audit_logger,
            today=self.today,
            restamp_date_on_edit=self.restamp_date_on_edit,
        )

    def summary(self) -> FinancialSummary:
        """Dashboard values for the current collection."""
        return summarize(self.store.all())


def create_storage(settings: Settings) -> KeyValueStorageInterface:
    """Create the configured key/value backend."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(storage_settings.data_file)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    today: Callable[[], date] = date.today,
    setup_logging: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (default get_settings())
        storage: Backend override; tests pass an in-memory one
        today: Clock for new transaction dates
        setup_logging: Whether to configure structlog from settings

    Returns:
        AppComponents with the store already loaded
    """
    settings = settings or get_settings()
    app_settings = settings.app

    if setup_logging:
        configure_logging(
            level=app_settings.effective_log_level,
            json_logs=app_settings.json_logs,
        )

    audit_logger = AuditLogger()
    storage = storage or create_storage(settings)

    store = TransactionStore(
        storage=storage,
        key=settings.storage.transactions_key,
        audit_logger=audit_logger,
    )
    store.load()

    return AppComponents(
        storage=storage,
        store=store,
        today=today,
        restamp_date_on_edit=app_settings.restamp_date_on_edit,
        audit_logger=audit_logger,
    )
