"""Shared fixtures.

Every test gets its own data/export directories under ``tmp_path`` and a
clean ``LEDGERLITE_*`` environment so a developer's shell settings cannot
change which backend is exercised.
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from ledgerlite.config import StorageConfig
from ledgerlite.core.models import Transaction, TransactionType


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LEDGERLITE_STORAGE", "LEDGERLITE_LOG_LEVEL"):
        # setenv first so values loaded from .env files are undone on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def storage(tmp_path):
    return StorageConfig(data_dir=tmp_path / "data", export_dir=tmp_path / "exports")


@pytest.fixture
def make_tx():
    def _make(
        day=date(2024, 3, 15),
        description="Groceries",
        category="Food",
        amount="10.00",
        type=TransactionType.EXPENSE,
    ):
        return Transaction(
            id=uuid.uuid4(),
            date=day,
            description=description,
            category=category,
            amount=Decimal(amount),
            type=type,
        )

    return _make
