# ledgerlite/manual.py
import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import yaml

from ledgerlite.core.errors import ValidationError
from ledgerlite.core.models import Transaction, TransactionType


def _parse_date(value, entry):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            pass
    raise ValidationError(f"Unrecognized 'date' in manual entry: {entry}")


def load_manual_transactions(path):
    """Load manual transactions from a YAML file."""
    with open(path, encoding='utf-8') as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValidationError(f"{path} must contain a list of transactions")

    txs = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ValidationError(f"Manual entry must be a mapping: {entry!r}")
        for key in ('date', 'amount', 'type'):
            if entry.get(key) is None:
                raise ValidationError(f"Missing '{key}' in manual entry: {entry}")
        try:
            amount = Decimal(str(entry['amount']))
        except InvalidOperation:
            raise ValidationError(f"Invalid 'amount' in manual entry: {entry}") from None
        tx_id = entry.get('id')
        try:
            tx_id = uuid.UUID(str(tx_id)) if tx_id else uuid.uuid4()
        except ValueError:
            raise ValidationError(f"Invalid 'id' in manual entry: {entry}") from None
        txs.append(
            Transaction(
                id=tx_id,
                date=_parse_date(entry['date'], entry),
                description=str(entry.get('description') or '').strip(),
                category=str(entry.get('category') or '').strip(),
                amount=amount,
                type=TransactionType.parse(entry['type']),
            )
        )
    return txs
