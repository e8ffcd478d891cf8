import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledgerlite.core.errors import TransactionNotFoundError, ValidationError
from ledgerlite.core.models import TransactionType
from ledgerlite.service import TransactionService, validate_transaction
from ledgerlite.stores.json_store import JsonTransactionStore


@pytest.fixture
def service(storage):
    return TransactionService(JsonTransactionStore(storage))


def test_add_valid_transaction(service, make_tx):
    tx = make_tx()
    service.add_transaction(tx)
    assert service.list_transactions() == [tx]


@pytest.mark.parametrize(
    "changes",
    [
        {"amount": Decimal("0")},
        {"amount": Decimal("-5")},
        {"amount": Decimal("Infinity")},
        {"description": ""},
        {"description": "   "},
        {"description": "d" * 501},
        {"category": ""},
        {"category": "c" * 101},
        {"type": 3},
    ],
)
def test_invalid_transactions_are_rejected(service, make_tx, changes):
    tx = replace(make_tx(), **changes)
    with pytest.raises(ValidationError):
        service.add_transaction(tx)
    assert service.list_transactions() == []


def test_length_limits_are_inclusive(make_tx):
    validate_transaction(make_tx(description="d" * 500, category="c" * 100))


def test_update_existing(service, make_tx):
    tx = make_tx()
    service.add_transaction(tx)
    updated = replace(tx, description="Updated", amount=Decimal("200"), type=TransactionType.INCOME)
    service.update_transaction(updated)
    assert service.get_transaction(tx.id) == updated


def test_update_unknown_raises(service, make_tx):
    with pytest.raises(TransactionNotFoundError):
        service.update_transaction(make_tx())


def test_delete(service, make_tx):
    tx = make_tx()
    service.add_transaction(tx)
    service.delete_transaction(tx.id)
    assert service.list_transactions() == []


def test_recent_transactions_limits_newest_first(service, make_tx):
    for day in range(1, 6):
        service.add_transaction(make_tx(day=date(2024, 1, day)))
    recent = service.recent_transactions(limit=2)
    assert [tx.date.day for tx in recent] == [5, 4]


def test_find_by_prefix(service, make_tx):
    tx = make_tx()
    service.add_transaction(tx)
    assert service.find_by_prefix(str(tx.id)) == tx
    assert service.find_by_prefix(str(tx.id)[:8].upper()) == tx


def test_find_by_prefix_too_short_or_missing(service, make_tx):
    tx = make_tx()
    service.add_transaction(tx)
    with pytest.raises(TransactionNotFoundError):
        service.find_by_prefix(str(tx.id)[:4])
    with pytest.raises(TransactionNotFoundError):
        service.find_by_prefix(str(uuid.uuid4()))


def test_find_by_prefix_ambiguous(service, make_tx):
    a = replace(make_tx(), id=uuid.UUID("12345678-0000-4000-8000-000000000001"))
    b = replace(make_tx(), id=uuid.UUID("12345678-0000-4000-8000-000000000002"))
    service.add_transaction(a)
    service.add_transaction(b)
    with pytest.raises(TransactionNotFoundError, match="ambiguous"):
        service.find_by_prefix("12345678")
