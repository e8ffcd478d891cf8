# ledgerlite/stores/json_store.py

import logging
import os
import uuid
from pathlib import Path
from typing import List, Optional

from ledgerlite.config import StorageConfig
from ledgerlite.core.errors import CorruptDataError, TransactionNotFoundError
from ledgerlite.core.models import Transaction
from ledgerlite.core.serialization import dumps_transactions, loads_transactions

logger = logging.getLogger(__name__)

DATA_FILENAME = "transactions.json"


def json_data_path(storage: StorageConfig) -> Path:
    return Path(storage.data_dir) / DATA_FILENAME


class JsonTransactionStore:
    """
    Keeps every transaction in memory and mirrors the full list to
    ``<data_dir>/transactions.json`` after each change.

    An unreadable data file is logged and left on disk; the store then
    starts empty.
    """

    def __init__(self, storage: StorageConfig):
        self.storage = storage
        self.path = json_data_path(storage)
        self._transactions: List[Transaction] = []
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            text = self.path.read_text(encoding="utf-8")
            self._transactions = loads_transactions(text)
        except (CorruptDataError, OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Data file %s is unreadable (%s); starting with no transactions.",
                self.path, e,
            )
            self._transactions = []

    def _save(self, transactions: List[Transaction]):
        """Write *transactions* to disk, then make them the in-memory state.

        A failed write leaves both the data file and the in-memory list as
        they were.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(dumps_transactions(transactions))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except Exception:
            if tmp_path.is_file():
                tmp_path.unlink()
            raise
        self._transactions = transactions

    def _index_of(self, transaction_id: uuid.UUID) -> int:
        for i, tx in enumerate(self._transactions):
            if tx.id == transaction_id:
                return i
        return -1

    def add(self, transaction: Transaction) -> None:
        self._save(self._transactions + [transaction])

    def list_all(self) -> List[Transaction]:
        # sorted() is stable with reverse=True, so same-day entries keep insertion order
        return sorted(self._transactions, key=lambda tx: tx.date, reverse=True)

    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        index = self._index_of(transaction_id)
        return self._transactions[index] if index != -1 else None

    def update(self, transaction: Transaction) -> None:
        index = self._index_of(transaction.id)
        if index == -1:
            raise TransactionNotFoundError(f"Transaction {transaction.id} not found.")
        transactions = list(self._transactions)
        transactions[index] = transaction
        self._save(transactions)

    def delete_by_id(self, transaction_id: uuid.UUID) -> None:
        index = self._index_of(transaction_id)
        if index == -1:
            return
        self._save(self._transactions[:index] + self._transactions[index + 1:])
