# app/services/stats.py
"""
Derived views over the transaction store: summary totals, monthly trends
and CSV export.

Stateless: every call recomputes from a fresh ``store.get_all()`` snapshot.
All sums are Decimal, so totals never drift by a cent.
"""

from __future__ import annotations

import csv
import io
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List

from app.services.store import Transaction, TransactionStore, TransactionType

ZERO = Decimal("0.00")
CSV_HEADER = ("Date", "Type", "Category", "Description", "Amount")


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal
    expenses_by_category: Dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyTrend:
    month: str
    income: Decimal
    expenses: Decimal


def month_key(d: date) -> str:
    """'YYYY-MM' bucket key (zero-padded, so lexical order is chronological)."""
    return f"{d.year:04d}-{d.month:02d}"


class StatsEngine:
    def __init__(self, store: TransactionStore) -> None:
        self._store = store

    def summarize(self) -> Summary:
        total_income = ZERO
        total_expenses = ZERO
        by_category: Dict[str, Decimal] = {}

        for tx in self._store.get_all():
            if tx.type is TransactionType.income:
                total_income += tx.amount
            else:
                total_expenses += tx.amount
                by_category[tx.category] = by_category.get(tx.category, ZERO) + tx.amount

        return Summary(
            total_income=total_income,
            total_expenses=total_expenses,
            net_income=total_income - total_expenses,
            expenses_by_category=by_category,
        )

    def trends(self) -> List[MonthlyTrend]:
        """
        One entry per month that has at least one transaction, ascending by month.
        Months without transactions are omitted, not zero-filled.
        """
        buckets: Dict[str, Dict[str, Decimal]] = defaultdict(
            lambda: {"income": ZERO, "expenses": ZERO}
        )

        for tx in self._store.get_all():
            bucket = buckets[month_key(tx.date)]
            if tx.type is TransactionType.income:
                bucket["income"] += tx.amount
            else:
                bucket["expenses"] += tx.amount

        return [
            MonthlyTrend(month=month, income=totals["income"], expenses=totals["expenses"])
            for month, totals in sorted(buckets.items())
        ]

    def export_csv(self, rfc4180: bool = False) -> str:
        """
        Serialize all transactions (newest first) as CSV text.

        Default output matches the legacy export byte for byte: the description
        is wrapped in double quotes without escaping, rows are joined by "\\n"
        and there is no trailing newline. Pass ``rfc4180=True`` for properly
        escaped CSV.
        """
        transactions = self._store.get_all()
        if rfc4180:
            return _export_rfc4180(transactions)

        rows = [",".join(CSV_HEADER)]
        for tx in transactions:
            rows.append(
                ",".join(
                    [
                        tx.date.isoformat(),
                        tx.type.value,
                        tx.category,
                        f'"{tx.description or ""}"',
                        str(tx.amount),
                    ]
                )
            )
        return "\n".join(rows)


def _export_rfc4180(transactions: List[Transaction]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for tx in transactions:
        writer.writerow(
            [
                tx.date.isoformat(),
                tx.type.value,
                tx.category,
                tx.description or "",
                str(tx.amount),
            ]
        )
    return buf.getvalue()
