# app/services/sample_data.py
"""
Sample transactions loaded into an empty store at start-up
(FINANCE_TRACKER_SEED_SAMPLE_DATA, on by default).
"""

from decimal import Decimal
from datetime import date
from typing import List

from app.services.store import TransactionInput, TransactionStore, TransactionType

SAMPLE_TRANSACTIONS: List[TransactionInput] = [
    TransactionInput(
        type=TransactionType.expense,
        amount=Decimal("85.40"),
        category="food",
        description="Grocery Shopping",
        date=date(2024, 10, 15),
    ),
    TransactionInput(
        type=TransactionType.income,
        amount=Decimal("850.00"),
        category="freelance",
        description="Freelance Project",
        date=date(2024, 10, 14),
    ),
    TransactionInput(
        type=TransactionType.expense,
        amount=Decimal("45.20"),
        category="transportation",
        description="Gas Station",
        date=date(2024, 10, 13),
    ),
    TransactionInput(
        type=TransactionType.income,
        amount=Decimal("4200.00"),
        category="salary",
        description="Monthly Salary",
        date=date(2024, 10, 12),
    ),
    TransactionInput(
        type=TransactionType.expense,
        amount=Decimal("120.45"),
        category="bills",
        description="Electric Bill",
        date=date(2024, 10, 10),
    ),
]


def seed_sample_data(store: TransactionStore) -> int:
    """
    Insert the sample transactions if the store is empty.
    Returns the number of transactions inserted (0 if the store had data).
    """
    if store.count() > 0:
        return 0
    for data in SAMPLE_TRANSACTIONS:
        store.create(data)
    return len(SAMPLE_TRANSACTIONS)
