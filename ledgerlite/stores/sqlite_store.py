# ledgerlite/stores/sqlite_store.py

import logging
import sqlite3
import uuid
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from ledgerlite.config import StorageConfig
from ledgerlite.core.errors import CorruptDataError, TransactionNotFoundError
from ledgerlite.core.models import Transaction, TransactionType
from ledgerlite.core.serialization import loads_transactions
from ledgerlite.stores.json_store import json_data_path

logger = logging.getLogger(__name__)

DB_FILENAME = "ledgerlite.db"

_COLUMNS = "id, date, description, category, amount, type"


def _init_db(conn: sqlite3.Connection) -> None:
    # amount is kept as decimal text so values round-trip exactly
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS transactions (
            id TEXT PRIMARY KEY,
            date TEXT NOT NULL,
            description TEXT NOT NULL CHECK (length(description) <= 500),
            category TEXT NOT NULL CHECK (length(category) <= 100),
            amount TEXT NOT NULL,
            type INTEGER NOT NULL CHECK (type IN (0, 1))
        )
        """
    )
    conn.commit()


def _to_row(tx: Transaction) -> tuple:
    return (
        str(tx.id),
        tx.date.isoformat(),
        tx.description,
        tx.category,
        str(tx.amount),
        int(tx.type),
    )


def _from_row(row) -> Transaction:
    return Transaction(
        id=uuid.UUID(row[0]),
        date=date.fromisoformat(row[1]),
        description=row[2],
        category=row[3],
        amount=Decimal(row[4]),
        type=TransactionType(row[5]),
    )


def open_database(db_path: Path) -> sqlite3.Connection:
    """Connect to *db_path* and make sure the schema exists.

    A file that SQLite cannot read as a database is deleted and a fresh,
    empty database is created in its place. The data loss is logged as a
    warning.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        _init_db(conn)
        return conn
    except sqlite3.OperationalError:
        # locked or read-only; the file itself is fine
        conn.close()
        raise
    except sqlite3.DatabaseError as e:
        conn.close()
        logger.warning(
            "Database %s is corrupt (%s); deleting it and starting a new one.",
            db_path, e,
        )
        db_path.unlink(missing_ok=True)

    conn = sqlite3.connect(db_path)
    _init_db(conn)
    return conn


def migrate_from_json(conn: sqlite3.Connection, storage: StorageConfig) -> int:
    """Import ``transactions.json`` into an empty ``transactions`` table.

    The JSON file is deleted only after every record has been committed.
    Nothing happens when the file is missing or the table already has rows,
    so calling this repeatedly never imports twice.

    Returns the number of imported transactions. Failures are logged and
    reported as ``0``; they never propagate.
    """
    json_path = json_data_path(storage)
    if not json_path.exists():
        return 0
    if conn.execute("SELECT 1 FROM transactions LIMIT 1").fetchone():
        return 0

    try:
        transactions = loads_transactions(json_path.read_text(encoding="utf-8"))
    except (CorruptDataError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to migrate from %s: %s", json_path, e)
        return 0

    if not transactions:
        return 0

    try:
        with conn:
            conn.executemany(
                f"INSERT OR REPLACE INTO transactions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                [_to_row(tx) for tx in transactions],
            )
    except sqlite3.Error as e:
        logger.warning("Failed to migrate from %s: %s", json_path, e)
        return 0

    try:
        json_path.unlink()
    except OSError as e:
        logger.warning("Migrated %s but could not delete it: %s", json_path, e)
    logger.info(
        "Migrated %d transaction(s) from %s to SQLite.", len(transactions), json_path
    )
    return len(transactions)


class SqliteTransactionStore:
    """Transaction store backed by ``<data_dir>/ledgerlite.db``.

    Opening the store creates the schema (recreating a corrupt file) and then
    imports a leftover JSON data file, if any, before returning.
    """

    def __init__(self, storage: StorageConfig):
        self.storage = storage
        self.path = Path(storage.data_dir) / DB_FILENAME
        self._conn = open_database(self.path)
        self.migrated = migrate_from_json(self._conn, storage)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def add(self, transaction: Transaction) -> None:
        with self._conn:
            self._conn.execute(
                f"INSERT OR REPLACE INTO transactions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                _to_row(transaction),
            )

    def list_all(self) -> List[Transaction]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM transactions ORDER BY date DESC, rowid ASC"
        ).fetchall()
        return [_from_row(r) for r in rows]

    def get_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM transactions WHERE id = ?",
            (str(transaction_id),),
        ).fetchone()
        return _from_row(row) if row else None

    def update(self, transaction: Transaction) -> None:
        row = _to_row(transaction)
        with self._conn:
            cur = self._conn.execute(
                """
                UPDATE transactions
                SET date = ?, description = ?, category = ?, amount = ?, type = ?
                WHERE id = ?
                """,
                row[1:] + row[:1],
            )
            if cur.rowcount == 0:
                raise TransactionNotFoundError(f"Transaction {transaction.id} not found.")

    def delete_by_id(self, transaction_id: uuid.UUID) -> None:
        with self._conn:
            self._conn.execute(
                "DELETE FROM transactions WHERE id = ?", (str(transaction_id),)
            )
