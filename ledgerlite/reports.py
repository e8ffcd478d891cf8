# ledgerlite/reports.py
from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from ledgerlite.core.errors import ValidationError
from ledgerlite.core.models import CategoryAmount, ReportResult, Transaction, TransactionType
from ledgerlite.stores.base import TransactionStore

TOP_CATEGORY_LIMIT = 3


def filter_transactions_by_month(transactions, year: int, month: int) -> List[Transaction]:
    """
    Return only those transactions whose date falls in the given year and month.
    """
    return [tx for tx in transactions if tx.date.year == year and tx.date.month == month]


def top_expense_categories(
    transactions, limit: int = TOP_CATEGORY_LIMIT
) -> List[CategoryAmount]:
    """Sum expenses per category and return the *limit* largest.

    Categories are grouped in the order they first appear in *transactions*
    and the sort is stable, so equal totals keep that order.
    """
    totals: Dict[str, Decimal] = {}
    for tx in transactions:
        if tx.type != TransactionType.EXPENSE:
            continue
        totals[tx.category] = totals.get(tx.category, Decimal(0)) + tx.amount

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryAmount(category, amount) for category, amount in ranked[:limit]]


def generate_monthly_report(store: TransactionStore, year: int, month: int) -> ReportResult:
    """Aggregate the store's transactions for one calendar month.

    Parameters
    ----------
    store:
        Any transaction store; only ``list_all`` is used.
    year:
        Calendar year, e.g. ``2024``.
    month:
        Month number from 1 to 12.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")

    filtered = filter_transactions_by_month(store.list_all(), year, month)

    total_income = sum(
        (tx.amount for tx in filtered if tx.type == TransactionType.INCOME), Decimal(0)
    )
    total_expense = sum(
        (tx.amount for tx in filtered if tx.type == TransactionType.EXPENSE), Decimal(0)
    )

    return ReportResult(
        total_income=total_income,
        total_expense=total_expense,
        net=total_income - total_expense,
        top_categories=top_expense_categories(filtered),
        transaction_count=len(filtered),
    )
