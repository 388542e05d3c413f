"""Tests for application wiring."""

from decimal import Decimal

from finance_tracker.models.form import FormState
from finance_tracker.models.transaction import TransactionType
from finance_tracker.orchestrator import create_app_components, create_storage
from finance_tracker.config import get_settings
from finance_tracker.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
)
from finance_tracker.store import encode_transactions

from tests.helpers import TODAY, make_transaction


class TestCreateStorage:
    """Tests for backend selection."""

    def test_json_file_is_default(self):
        """Test the default backend is the JSON file."""
        storage = create_storage(get_settings())
        assert isinstance(storage, JsonFileKeyValueStorage)
        assert storage.path.name == "finance_tracker.json"

    def test_memory_backend(self, monkeypatch):
        """Test selecting the in-memory backend."""
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_BACKEND", "memory")
        assert isinstance(create_storage(get_settings()), InMemoryKeyValueStorage)


class TestCreateAppComponents:
    """Tests for create_app_components."""

    def test_loads_existing_transactions(self):
        """Test the store is loaded from storage on creation."""
        storage = InMemoryKeyValueStorage()
        storage.set("transactions", encode_transactions([
            make_transaction("Salary", "1000", TransactionType.INCOME, "Salary"),
            make_transaction("Rent", "200", category="Housing"),
        ]))

        components = create_app_components(storage=storage, setup_logging=False)

        assert len(components.store) == 2
        summary = components.summary()
        assert summary.total_income == Decimal("1000")
        assert summary.total_expenses == Decimal("200")
        assert summary.balance == Decimal("800")

    def test_controller_writes_through_to_storage(self):
        """Test a full add flow from form to storage and back."""
        storage = InMemoryKeyValueStorage()
        components = create_app_components(
            storage=storage,
            today=lambda: TODAY,
            setup_logging=False,
        )
        controller = components.controller
        controller.set_description("Coffee")
        controller.set_amount("4.50")
        controller.submit()

        reloaded = create_app_components(storage=storage, setup_logging=False)
        [txn] = reloaded.store.all()
        assert txn.description == "Coffee"
        assert txn.date == TODAY
        assert reloaded.controller.state == FormState.IDLE

    def test_json_file_end_to_end(self, tmp_path, monkeypatch):
        """Test the configured file backend persists across app restarts."""
        data_file = tmp_path / "ledger.json"
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_DATA_FILE", str(data_file))

        first = create_app_components(setup_logging=False)
        first.controller.set_description("Bus")
        first.controller.set_amount("2.75")
        first.controller.set_category("Transportation")
        first.controller.submit()

        second = create_app_components(setup_logging=False)
        assert [t.description for t in second.store.all()] == ["Bus"]
        assert data_file.exists()

    def test_restamp_setting_reaches_controller(self, monkeypatch):
        """Test the edit date behaviour follows settings."""
        monkeypatch.setenv("RESTAMP_DATE_ON_EDIT", "true")
        storage = InMemoryKeyValueStorage()
        components = create_app_components(
            storage=storage,
            today=lambda: TODAY,
            setup_logging=False,
        )
        original = components.store.add(make_transaction(date=TODAY.replace(year=2020)))

        components.controller.start_edit(original.id)
        components.controller.submit()
        assert components.store.get(original.id).date == TODAY

    def test_audit_trail_is_shared(self):
        """Test the store and controller write to the same audit logger."""
        components = create_app_components(
            storage=InMemoryKeyValueStorage(),
            setup_logging=False,
        )
        components.controller.start_edit("missing")
        kinds = [e.event_type.value for e in components.audit_logger.recent_events()]
        assert kinds == ["target_not_found", "transactions_loaded"]

    def test_each_session_gets_its_own_controller(self):
        """Test form state is per session while the store is shared."""
        components = create_app_components(
            storage=InMemoryKeyValueStorage(),
            today=lambda: TODAY,
            setup_logging=False,
        )
        first = components.new_controller()
        second = components.new_controller()
        existing = components.store.add(make_transaction())

        first.start_edit(existing.id)
        first.set_description("Tea")

        assert second.state == FormState.IDLE
        assert second.fields.description == ""

        second.set_description("Bagel")
        second.set_amount("3")
        second.submit()
        assert {t.description for t in components.store.all()} == {"Coffee", "Bagel"}
        assert first.is_editing
