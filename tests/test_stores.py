"""Behaviour shared by both store backends."""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from ledgerlite.core.errors import TransactionNotFoundError
from ledgerlite.core.models import Transaction, TransactionType
from ledgerlite.stores.json_store import JsonTransactionStore
from ledgerlite.stores.sqlite_store import SqliteTransactionStore


@pytest.fixture(params=["json", "sqlite"])
def open_store(request, storage):
    opened = []

    def _open():
        cls = JsonTransactionStore if request.param == "json" else SqliteTransactionStore
        store = cls(storage)
        opened.append(store)
        return store

    yield _open
    for store in opened:
        if hasattr(store, "close"):
            store.close()


def test_missing_data_starts_empty(open_store):
    assert open_store().list_all() == []


def test_round_trip_after_reopen(open_store, make_tx):
    tx = make_tx(day=date(2023, 12, 31), amount="123.45", type=TransactionType.INCOME)
    open_store().add(tx)

    loaded = open_store().get_by_id(tx.id)
    assert loaded == tx
    assert loaded.amount == Decimal("123.45")
    assert str(loaded.amount) == "123.45"
    assert loaded.date == date(2023, 12, 31)


def test_list_all_is_newest_first_with_insertion_order_for_ties(open_store, make_tx):
    store = open_store()
    first = make_tx(day=date(2024, 3, 10), description="first")
    older = make_tx(day=date(2024, 3, 1), description="older")
    second = make_tx(day=date(2024, 3, 10), description="second")
    newest = make_tx(day=date(2024, 4, 2), description="newest")
    for tx in (first, older, second, newest):
        store.add(tx)

    expected = ["newest", "first", "second", "older"]
    assert [tx.description for tx in store.list_all()] == expected
    assert [tx.description for tx in open_store().list_all()] == expected


def test_get_by_id_unknown_returns_none(open_store):
    assert open_store().get_by_id(uuid.uuid4()) is None


def test_update_replaces_whole_record(open_store, make_tx):
    store = open_store()
    tx = make_tx()
    store.add(tx)
    updated = Transaction(
        id=tx.id,
        date=date(2024, 3, 16),
        description="Updated",
        category="NewCat",
        amount=Decimal("200"),
        type=TransactionType.INCOME,
    )
    store.update(updated)

    assert store.get_by_id(tx.id) == updated
    assert open_store().get_by_id(tx.id) == updated
    assert len(store.list_all()) == 1


def test_update_unknown_id_raises(open_store, make_tx):
    store = open_store()
    store.add(make_tx())
    with pytest.raises(TransactionNotFoundError):
        store.update(make_tx())


def test_delete_removes_record(open_store, make_tx):
    store = open_store()
    keep, drop = make_tx(description="keep"), make_tx(description="drop")
    store.add(keep)
    store.add(drop)

    store.delete_by_id(drop.id)

    assert store.list_all() == [keep]
    assert open_store().list_all() == [keep]


def test_delete_unknown_id_is_noop(open_store, make_tx):
    store = open_store()
    tx = make_tx()
    store.add(tx)
    store.delete_by_id(uuid.uuid4())
    assert store.list_all() == [tx]
