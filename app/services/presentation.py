# app/services/presentation.py
#
# Presentation Lookups
# Category display labels/colours and number/date formatting for the dashboard.
# Categories stay an open set in the store; this table only decorates known ones.

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Tuple

CATEGORY_LABELS: Dict[str, str] = {
    "bills": "Bills & Utilities",
    "food": "Food & Dining",
    "transportation": "Transportation",
    "shopping": "Shopping",
    "entertainment": "Entertainment",
    "healthcare": "Healthcare",
    "salary": "Salary",
    "freelance": "Freelance",
    "investment": "Investment",
}

CATEGORY_COLORS: Dict[str, str] = {
    "bills": "bg-purple-100 text-purple-800",
    "food": "bg-blue-100 text-blue-800",
    "transportation": "bg-yellow-100 text-yellow-800",
    "shopping": "bg-pink-100 text-pink-800",
    "entertainment": "bg-indigo-100 text-indigo-800",
    "healthcare": "bg-teal-100 text-teal-800",
    "salary": "bg-green-100 text-green-800",
    "freelance": "bg-green-100 text-green-800",
    "investment": "bg-green-100 text-green-800",
}

DEFAULT_CATEGORY_COLOR = "bg-gray-100 text-gray-800"

# Option groups offered by the entry form
INCOME_CATEGORIES = ("salary", "freelance", "investment")
EXPENSE_CATEGORIES = (
    "food",
    "transportation",
    "shopping",
    "entertainment",
    "bills",
    "healthcare",
)


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


def format_currency(amount) -> str:
    """
    Format a monetary amount as US dollars, e.g. 1234.5 -> '$1,234.50'.
    Negative values get a leading minus: '-$12.00'.
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(d: date) -> str:
    # 'Oct 15, 2024' (day without zero padding)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def category_shares(
    amounts: Mapping[str, Decimal],
) -> List[Tuple[str, Decimal, Decimal]]:
    """
    Turn a category -> amount mapping into (category, amount, percent) rows,
    biggest first. Percent is rounded to one decimal place.
    """
    total = sum(amounts.values(), Decimal("0"))
    if not amounts or total == 0:
        return []

    rows = []
    for category, amount in sorted(amounts.items(), key=lambda kv: kv[1], reverse=True):
        percent = (amount / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        rows.append((category, amount, percent))
    return rows
