from datetime import date
from decimal import Decimal

import pytest

from ledgerlite.core.errors import ValidationError
from ledgerlite.core.models import Transaction, TransactionType


@pytest.mark.parametrize(
    "value, expected",
    [
        (TransactionType.EXPENSE, TransactionType.EXPENSE),
        (0, TransactionType.INCOME),
        (1, TransactionType.EXPENSE),
        ("income", TransactionType.INCOME),
        (" Expense ", TransactionType.EXPENSE),
    ],
)
def test_transaction_type_parse(value, expected):
    assert TransactionType.parse(value) is expected


@pytest.mark.parametrize("value", [2, -1, "refund", True, None, 1.0])
def test_transaction_type_parse_rejects_unknown(value):
    with pytest.raises(ValidationError):
        TransactionType.parse(value)


def test_new_transaction_gets_unique_id():
    a = Transaction.new(date(2024, 1, 1), "Salary", "Job", "3000", "income")
    b = Transaction.new(date(2024, 1, 1), "Salary", "Job", "3000", "income")
    assert a.id != b.id
    assert a.amount == Decimal("3000")
    assert a.type is TransactionType.INCOME


def test_transaction_is_immutable(make_tx):
    tx = make_tx()
    with pytest.raises(AttributeError):
        tx.amount = Decimal("1")
