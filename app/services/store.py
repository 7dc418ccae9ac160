# app/services/store.py
#
# Transaction Store
# Domain types for income/expense transactions and the storage interface that owns them.
# MemoryTransactionStore is the default backend; SqlTransactionStore (sql_store.py)
# implements the same interface on top of SQLAlchemy.

from __future__ import annotations

import re
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.logging_setup import get_logger

logger = get_logger("finance_tracker.store")

CENT = Decimal("0.01")
# Largest value that fits the Numeric(12, 2) column
MAX_AMOUNT = Decimal("9999999999.99")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
UPDATABLE_FIELDS = frozenset({"type", "amount", "category", "date", "description"})


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


# ---- Value normalization ----

def to_amount(value: Any) -> Decimal:
    """
    Convert a monetary value (str, int, float or Decimal) into a non-negative
    Decimal with exactly 2 fractional digits.
    """
    if isinstance(value, bool):
        raise ValueError("amount must be a number, not a boolean")
    if isinstance(value, float):
        # Go through str() so 85.4 becomes Decimal("85.4"), not its binary expansion
        value = str(value)
    try:
        amount = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"invalid amount: {value!r}") from None

    if not amount.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {value!r}")
    if amount > MAX_AMOUNT:
        raise ValueError(f"amount must not exceed {MAX_AMOUNT}: {value!r}")

    # copy_abs: "-0" compares equal to 0 but would keep its sign
    return amount.copy_abs().quantize(CENT, rounding=ROUND_HALF_UP)


def to_date(value: Any) -> date:
    """Accept a date or a fixed-width 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_RE.match(value.strip()):
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    raise ValueError(f"date must be in YYYY-MM-DD format: {value!r}")


def normalize_description(value: Optional[str]) -> Optional[str]:
    # Missing and empty descriptions are both stored as absent (None)
    return value or None


# ---- Domain types ----

@dataclass(frozen=True)
class TransactionInput:
    """Caller-supplied fields for a new transaction (everything but the id)."""

    type: TransactionType
    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Read-only snapshot of a stored transaction."""

    id: str
    type: TransactionType
    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": str(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
            "description": self.description,
        }


def build_transaction(tx_id: str, data: TransactionInput) -> Transaction:
    return Transaction(
        id=tx_id,
        type=TransactionType(data.type),
        amount=to_amount(data.amount),
        category=data.category,
        date=to_date(data.date),
        description=normalize_description(data.description),
    )


def normalize_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate field names of a partial update and coerce provided values.
    Fields not present in ``changes`` are left out (and so stay unchanged).
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"cannot update fields: {sorted(unknown)}")

    normalized: Dict[str, Any] = {}
    for field, value in changes.items():
        if field == "type":
            normalized[field] = TransactionType(value)
        elif field == "amount":
            normalized[field] = to_amount(value)
        elif field == "date":
            normalized[field] = to_date(value)
        elif field == "description":
            normalized[field] = normalize_description(value)
        else:
            normalized[field] = value
    return normalized


def newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    # sorted() is stable: equal dates keep their incoming (insertion) order
    return sorted(transactions, key=lambda t: t.date, reverse=True)


# ---- Storage interface ----

class TransactionStore(ABC):
    """
    Authoritative collection of transactions, keyed by id.

    Every read returns transactions ordered by date, newest first; the
    filtered reads preserve that order.
    """

    @abstractmethod
    def get_all(self) -> List[Transaction]:
        ...

    @abstractmethod
    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        ...

    @abstractmethod
    def create(self, data: TransactionInput) -> Transaction:
        ...

    @abstractmethod
    def update(self, tx_id: str, changes: Mapping[str, Any]) -> Optional[Transaction]:
        """Merge ``changes`` onto an existing record; None if the id is unknown."""

    @abstractmethod
    def delete(self, tx_id: str) -> bool:
        ...

    def count(self) -> int:
        return len(self.get_all())

    def get_by_date_range(self, start: date | str, end: date | str) -> List[Transaction]:
        """Transactions with start <= date <= end (both bounds inclusive)."""
        start_d, end_d = to_date(start), to_date(end)
        return [t for t in self.get_all() if start_d <= t.date <= end_d]

    def get_by_type(self, tx_type: TransactionType | str) -> List[Transaction]:
        wanted = TransactionType(tx_type)
        return [t for t in self.get_all() if t.type == wanted]

    def get_by_category(self, category: str) -> List[Transaction]:
        return [t for t in self.get_all() if t.category == category]

    def close(self) -> None:
        """Release backend resources (no-op for in-memory storage)."""


class MemoryTransactionStore(TransactionStore):
    """
    In-memory store. All mutations and snapshot reads run under one lock,
    so readers never observe a half-applied update.
    """

    def __init__(self) -> None:
        self._transactions: Dict[str, Transaction] = {}
        self._lock = threading.RLock()

    def get_all(self) -> List[Transaction]:
        with self._lock:
            return newest_first(self._transactions.values())

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        with self._lock:
            return self._transactions.get(tx_id)

    def count(self) -> int:
        with self._lock:
            return len(self._transactions)

    def create(self, data: TransactionInput) -> Transaction:
        with self._lock:
            tx_id = str(uuid.uuid4())
            while tx_id in self._transactions:
                tx_id = str(uuid.uuid4())
            tx = build_transaction(tx_id, data)
            self._transactions[tx_id] = tx

        logger.debug("created transaction id=%s type=%s", tx.id, tx.type.value)
        return tx

    def update(self, tx_id: str, changes: Mapping[str, Any]) -> Optional[Transaction]:
        normalized = normalize_changes(changes)
        with self._lock:
            existing = self._transactions.get(tx_id)
            if existing is None:
                return None
            updated = replace(existing, **normalized)
            self._transactions[tx_id] = updated

        logger.debug("updated transaction id=%s fields=%s", tx_id, sorted(normalized))
        return updated

    def delete(self, tx_id: str) -> bool:
        with self._lock:
            removed = self._transactions.pop(tx_id, None) is not None

        if removed:
            logger.debug("deleted transaction id=%s", tx_id)
        return removed
