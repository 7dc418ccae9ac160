# app/services/query_helpers.py
#
# Query Helper Functions
# Parse optional list/dashboard query parameters and apply search, amount filters
# and sorting to a snapshot of transactions.

import calendar
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from app.services.presentation import category_label
from app.services.store import Transaction, to_date


# ---- Parameter parsing ----

def parse_optional_date(s: Optional[str]) -> Optional[date]:
    """Blank -> None; otherwise a strict 'YYYY-MM-DD' date (ValueError if not)."""
    if not s:
        return None
    s = s.strip()
    if not s:
        return None
    return to_date(s)


# Convert amount filters leniently: garbage means "no filter"
def parse_optional_decimal(value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    value = value.strip()
    if value == "":
        return None
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def get_month_range(month_str: Optional[str]) -> Tuple[Optional[date], Optional[date], Optional[str]]:
    """
    month_str: 'YYYY-MM' or None.
    Returns (first_day, last_day_inclusive, normalized_month_str).
    If month_str is None or invalid, returns (None, None, None) meaning "all months".
    """
    if not month_str:
        return None, None, None

    try:
        year_str, month_only_str = month_str.strip().split("-")
        year = int(year_str)
        month = int(month_only_str)
        if not (1 <= month <= 12) or not (1 <= year <= 9999):
            raise ValueError
    except ValueError:
        return None, None, None

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day), f"{year:04d}-{month:02d}"


# ---- Filtering & sorting ----

def matches_search(tx: Transaction, term: Optional[str]) -> bool:
    """Case-insensitive match on description, category tag or category label."""
    if not term or not term.strip():
        return True
    needle = term.strip().lower()
    haystacks = (tx.description or "", tx.category, category_label(tx.category))
    return any(needle in h.lower() for h in haystacks)


def filter_transactions(
    transactions: List[Transaction],
    *,
    search: Optional[str] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
) -> List[Transaction]:
    result = []
    for tx in transactions:
        if not matches_search(tx, search):
            continue
        if min_amount is not None and tx.amount < min_amount:
            continue
        if max_amount is not None and tx.amount > max_amount:
            continue
        result.append(tx)
    return result


def sort_transactions(
    transactions: List[Transaction],
    sort: str = "date",
    direction: str = "desc",
) -> List[Transaction]:
    sort_key = sort if sort in {"date", "amount"} else "date"
    sort_dir = direction if direction in {"asc", "desc"} else "desc"

    if sort_key == "amount":
        key = lambda t: t.amount  # noqa: E731
    else:
        key = lambda t: t.date  # noqa: E731

    return sorted(transactions, key=key, reverse=(sort_dir == "desc"))
