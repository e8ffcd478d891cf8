# ledgerlite/core/serialization.py

"""JSON document codec for transactions.

The document is a UTF-8 JSON array of objects keyed ``id``, ``date``,
``description``, ``category``, ``amount`` and ``type``. Amounts are written
as decimal strings so that no precision is lost; on read, numeric amounts
are parsed straight to :class:`~decimal.Decimal` (never through ``float``).
Integer type codes, timestamped dates and differently-cased keys are also
accepted so that older files keep loading.
"""

from __future__ import annotations

import json
import uuid
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, List

from ledgerlite.core.errors import CorruptDataError
from ledgerlite.core.models import Transaction, TransactionType

FIELDS = ("id", "date", "description", "category", "amount", "type")


def transaction_to_dict(tx: Transaction) -> dict:
    return {
        "id": str(tx.id),
        "date": tx.date.isoformat(),
        "description": tx.description,
        "category": tx.category,
        "amount": str(tx.amount),
        "type": tx.type.label,
    }


def _parse_amount(raw) -> Decimal:
    if isinstance(raw, bool) or not isinstance(raw, (int, str, Decimal)):
        raise ValueError(f"amount must be a number or decimal string, got {raw!r}")
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        raise ValueError(f"invalid amount {raw!r}") from None
    if not amount.is_finite():
        raise ValueError(f"invalid amount {raw!r}")
    return amount


def _parse_date(raw) -> date:
    if not isinstance(raw, str):
        raise ValueError(f"date must be a string, got {raw!r}")
    # Only the calendar part matters; older files carry a time component.
    return date.fromisoformat(raw.strip()[:10])


def transaction_from_dict(entry: dict) -> Transaction:
    if not isinstance(entry, dict):
        raise ValueError(f"expected an object, got {type(entry).__name__}")
    data = {str(k).lower(): v for k, v in entry.items()}
    missing = [name for name in FIELDS if name not in data]
    if missing:
        raise ValueError(f"missing field(s) {', '.join(missing)}")
    description = data["description"]
    category = data["category"]
    if not isinstance(description, str) or not isinstance(category, str):
        raise ValueError("description and category must be strings")
    return Transaction(
        id=uuid.UUID(str(data["id"])),
        date=_parse_date(data["date"]),
        description=description,
        category=category,
        amount=_parse_amount(data["amount"]),
        type=TransactionType.parse(data["type"]),
    )


def dumps_transactions(transactions: Iterable[Transaction]) -> str:
    return json.dumps(
        [transaction_to_dict(tx) for tx in transactions],
        indent=2,
        ensure_ascii=False,
    )


def loads_transactions(text: str) -> List[Transaction]:
    """Parse a transactions document.

    Raises
    ------
    CorruptDataError
        If the text is not valid JSON, is not a list, or any record is
        malformed. The error message names the offending record index.
    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except (ValueError, RecursionError) as exc:
        # deeply nested input overflows the decoder instead of failing to parse
        raise CorruptDataError(f"invalid JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise CorruptDataError(f"expected a JSON array, got {type(data).__name__}")

    txs = []
    for index, entry in enumerate(data):
        try:
            txs.append(transaction_from_dict(entry))
        except ValueError as exc:
            raise CorruptDataError(f"record {index}: {exc}") from exc
    return txs
