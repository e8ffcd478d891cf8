# ledgerlite/stores/base.py
from __future__ import annotations

import uuid
from typing import List, Optional, Protocol

from ledgerlite.core.models import Transaction


class TransactionStore(Protocol):
    """Persistence interface shared by the JSON and SQLite backends.

    ``list_all`` returns transactions newest first; transactions on the same
    date keep the order they were added in. Every mutating call has reached
    disk by the time it returns.
    """

    def add(self, transaction: Transaction) -> None:
        """Store a new transaction. Duplicate ids are not checked."""

    def list_all(self) -> List[Transaction]:
        """Return every transaction sorted by date, descending."""

    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """Return the transaction with *transaction_id*, or ``None``."""

    def update(self, transaction: Transaction) -> None:
        """Replace the stored record with the same id.

        Raises ``TransactionNotFoundError`` when no such record exists.
        """

    def delete_by_id(self, transaction_id: uuid.UUID) -> None:
        """Remove the record if present; unknown ids are ignored."""
