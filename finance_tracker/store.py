"""
Transaction Store

Owns the canonical, ordered list of transactions and keeps it in sync
with the key/value backend.

DESIGN DECISION: Every mutation is copy-then-write-then-swap:
1. Build the new list
2. Serialize and write the WHOLE list to storage
3. Only then replace the in-memory list

If the write fails, the in-memory collection is untouched and the
StorageError reaches the caller. There is no partial state and nothing
is retried.
"""

from typing import Iterator, Optional

from pydantic import ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEvent, AuditEventBuilder
from finance_tracker.models.transaction import (
    TRANSACTION_LIST_ADAPTER,
    Transaction,
)
from finance_tracker.services.storage import (
    CorruptDataError,
    DuplicateError,
    KeyValueStorageInterface,
    StorageError,
)

DEFAULT_TRANSACTIONS_KEY = "transactions"


def encode_transactions(transactions: list[Transaction]) -> str:
    """Serialize the collection to the persisted JSON array."""
    return TRANSACTION_LIST_ADAPTER.dump_json(transactions).decode("utf-8")


def decode_transactions(raw: str) -> list[Transaction]:
    """
    Parse the persisted JSON array.

    Raises:
        CorruptDataError: If the blob is not a valid array of transactions
                          or contains the same ID twice
    """
    try:
        transactions = TRANSACTION_LIST_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise CorruptDataError(
            f"Stored transactions are malformed ({e.error_count()} errors): {e}"
        )

    seen: set[str] = set()
    for transaction in transactions:
        if transaction.id in seen:
            raise CorruptDataError(f"Duplicate transaction id in storage: {transaction.id}")
        seen.add(transaction.id)
    return transactions


class TransactionStore:
    """
    The single source of truth for the transaction collection.

    Lifecycle: construct, call load() once at startup, then mutate through
    add/update/remove. Each mutation persists the full collection.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_TRANSACTIONS_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            storage: Key/value backend
            key: Storage key for the transaction array
            audit_logger: Where to record changes; None disables auditing
        """
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger
        self._transactions: list[Transaction] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def backup_key(self) -> str:
        """Key that receives an unreadable blob found during load()."""
        return f"{self._key}.corrupt"

    def _audit(self, event: AuditEvent) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> list[Transaction]:
        """
        Read the collection from storage, replacing what is in memory.

        Absent data gives an empty store. Unreadable data is logged,
        copied to backup_key, and also gives an empty store; it never
        stops startup.

        Returns:
            The loaded transactions
        """
        try:
            raw = self._storage.get(self._key)
        except StorageError as e:
            self._audit(AuditEventBuilder.load_failed(self._key, str(e), None))
            self._transactions = []
            return []

        if raw is None:
            self._transactions = []
            self._audit(AuditEventBuilder.transactions_loaded(0, self._key))
            return []

        try:
            transactions = decode_transactions(raw)
        except CorruptDataError as e:
            backup_key = self._backup_corrupt_blob(raw)
            self._audit(AuditEventBuilder.load_failed(self._key, str(e), backup_key))
            self._transactions = []
            return []

        self._transactions = transactions
        self._audit(AuditEventBuilder.transactions_loaded(len(transactions), self._key))
        return list(transactions)

    def _backup_corrupt_blob(self, raw: str) -> Optional[str]:
        """Keep the unreadable blob so the next write does not destroy it."""
        try:
            self._storage.set(self.backup_key, raw)
        except StorageError as e:
            self._audit(AuditEventBuilder.system_error(
                error_type="backup_failed",
                error_message=str(e),
                details={"backup_key": self.backup_key},
            ))
            return None
        return self.backup_key

    def has_corrupt_backup(self) -> bool:
        """Whether an unreadable blob from an earlier load is waiting in storage."""
        return self._storage.get(self.backup_key) is not None

    def discard_corrupt_backup(self) -> bool:
        """
        Delete the backup written by load() once the user has dealt with it.

        Returns:
            True if a backup existed

        Raises:
            StorageError: If the backend cannot be written
        """
        removed = self._storage.delete(self.backup_key)
        if removed:
            self._audit(AuditEventBuilder.backup_discarded(self.backup_key))
        return removed

    def _commit(self, transactions: list[Transaction], operation: str) -> None:
        """Persist the full collection, then make it current."""
        try:
            self._storage.set(self._key, encode_transactions(transactions))
        except StorageError as e:
            self._audit(AuditEventBuilder.persist_failed(operation, str(e)))
            raise
        self._transactions = transactions

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction and persist.

        Raises:
            DuplicateError: If a transaction with the same ID exists
            StorageError: If the write fails
        """
        if transaction.id in self:
            raise DuplicateError(f"Transaction already exists: {transaction.id}")

        self._commit([*self._transactions, transaction], "add")
        self._audit(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            transaction_type=transaction.type.value,
            category=transaction.category,
        ))
        return transaction

    def update(self, transaction_id: str, transaction: Transaction) -> bool:
        """
        Replace the transaction with the given ID and persist.

        The replacement always carries transaction_id. If no record has
        that ID the collection is unchanged (but still written).

        Returns:
            True if a record was replaced

        Raises:
            StorageError: If the write fails
        """
        replacement = transaction
        if replacement.id != transaction_id:
            replacement = transaction.model_copy(update={"id": transaction_id})

        found = False
        updated = []
        for existing in self._transactions:
            if existing.id == transaction_id:
                updated.append(replacement)
                found = True
            else:
                updated.append(existing)

        self._commit(updated, "update")

        if found:
            self._audit(AuditEventBuilder.transaction_updated(
                transaction_id=transaction_id,
                description=replacement.description,
                amount=replacement.amount,
            ))
        else:
            self._audit(AuditEventBuilder.target_not_found(transaction_id, "update"))
        return found

    def remove(self, transaction_id: str) -> bool:
        """
        Delete the transaction with the given ID and persist.

        Returns:
            True if a record was removed

        Raises:
            StorageError: If the write fails
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        found = len(remaining) != len(self._transactions)

        self._commit(remaining, "remove")

        if found:
            self._audit(AuditEventBuilder.transaction_deleted(transaction_id))
        else:
            self._audit(AuditEventBuilder.target_not_found(transaction_id, "remove"))
        return found

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> tuple[Transaction, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._transactions)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __contains__(self, transaction_id: object) -> bool:
        return any(t.id == transaction_id for t in self._transactions)
