# ledgerlite/service.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import List, Optional

from ledgerlite.core.errors import TransactionNotFoundError, ValidationError
from ledgerlite.core.models import Transaction, TransactionType
from ledgerlite.stores.base import TransactionStore

MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 100
MIN_ID_PREFIX = 8


def validate_transaction(transaction: Transaction) -> None:
    if transaction is None:
        raise ValidationError("Transaction is required.")
    if not isinstance(transaction.amount, Decimal) or not transaction.amount.is_finite():
        raise ValidationError("Amount must be a finite decimal.")
    if transaction.amount <= 0:
        raise ValidationError("Amount must be greater than zero.")
    if not transaction.description or not transaction.description.strip():
        raise ValidationError("Description cannot be empty.")
    if len(transaction.description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters."
        )
    if not transaction.category or not transaction.category.strip():
        raise ValidationError("Category cannot be empty.")
    if len(transaction.category) > MAX_CATEGORY_LENGTH:
        raise ValidationError(f"Category cannot exceed {MAX_CATEGORY_LENGTH} characters.")
    if not isinstance(transaction.type, TransactionType):
        raise ValidationError("Invalid transaction type.")


class TransactionService:
    """Validates transactions before handing them to a store."""

    def __init__(self, store: TransactionStore):
        if store is None:
            raise ValueError("store is required")
        self.store = store

    def add_transaction(self, transaction: Transaction) -> None:
        validate_transaction(transaction)
        self.store.add(transaction)

    def list_transactions(self) -> List[Transaction]:
        return self.store.list_all()

    def recent_transactions(self, limit: int = 20) -> List[Transaction]:
        return self.store.list_all()[:limit]

    def get_transaction(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        return self.store.get_by_id(transaction_id)

    def update_transaction(self, transaction: Transaction) -> None:
        validate_transaction(transaction)
        if self.store.get_by_id(transaction.id) is None:
            raise TransactionNotFoundError(f"Transaction {transaction.id} not found.")
        self.store.update(transaction)

    def delete_transaction(self, transaction_id: uuid.UUID) -> None:
        self.store.delete_by_id(transaction_id)

    def find_by_prefix(self, text: str) -> Transaction:
        """Resolve a full id or a unique id prefix of at least 8 characters."""
        text = (text or "").strip().lower()
        try:
            tx = self.store.get_by_id(uuid.UUID(text))
        except ValueError:
            tx = None
        if tx is not None:
            return tx

        if len(text) < MIN_ID_PREFIX:
            raise TransactionNotFoundError(
                f"Transaction '{text}' not found (use at least {MIN_ID_PREFIX} characters)."
            )
        matches = [t for t in self.store.list_all() if str(t.id).startswith(text)]
        if not matches:
            raise TransactionNotFoundError(f"Transaction '{text}' not found.")
        if len(matches) > 1:
            raise TransactionNotFoundError(
                f"Transaction id prefix '{text}' is ambiguous ({len(matches)} matches)."
            )
        return matches[0]
