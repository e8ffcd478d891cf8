# ledgerlite/core/models.py
from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

from ledgerlite.core.errors import ValidationError


class TransactionType(enum.IntEnum):
    INCOME = 0
    EXPENSE = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value) -> "TransactionType":
        """Accept a member, its integer code or its name (any case)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValidationError(f"Invalid transaction type: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValidationError(f"Invalid transaction type: {value!r}") from None
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        raise ValidationError(f"Invalid transaction type: {value!r}")


@dataclass(frozen=True)
class Transaction:
    id: uuid.UUID
    # calendar date only; a time of day in older data files is dropped on load
    date: date
    description: str
    category: str
    amount: Decimal
    type: TransactionType

    @classmethod
    def new(cls, date, description, category, amount, type) -> "Transaction":
        return cls(
            id=uuid.uuid4(),
            date=date,
            description=description,
            category=category,
            amount=Decimal(amount),
            type=TransactionType.parse(type),
        )


@dataclass(frozen=True)
class CategoryAmount:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class ReportResult:
    """Monthly aggregate produced by :func:`ledgerlite.reports.generate_monthly_report`."""

    total_income: Decimal
    total_expense: Decimal
    net: Decimal
    top_categories: List[CategoryAmount] = field(default_factory=list)
    transaction_count: int = 0
