from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.services.stats import MonthlyTrend, StatsEngine, month_key
from app.services.store import MemoryTransactionStore, TransactionInput, TransactionType


def _add(store, tx_type, amount, category, day, description=None):
    return store.create(
        TransactionInput(
            type=TransactionType(tx_type),
            amount=Decimal(amount),
            category=category,
            date=day,
            description=description,
        )
    )


# ---- Summary ------------------------------------------------------------------------


def test_summary_of_sample_data(seeded_store):
    summary = StatsEngine(seeded_store).summarize()

    assert summary.total_income == Decimal("5050.00")
    assert summary.total_expenses == Decimal("251.05")
    assert summary.net_income == Decimal("4798.95")
    assert summary.expenses_by_category == {
        "food": Decimal("85.40"),
        "transportation": Decimal("45.20"),
        "bills": Decimal("120.45"),
    }


def test_summary_of_empty_store():
    summary = StatsEngine(MemoryTransactionStore()).summarize()
    assert summary.total_income == 0
    assert summary.total_expenses == 0
    assert summary.net_income == 0
    assert summary.expenses_by_category == {}


def test_summary_invariants_hold_with_many_cents():
    store = MemoryTransactionStore()
    for i in range(1000):
        _add(store, "expense", "0.10", f"cat{i % 7}", date(2024, 1, 1 + i % 28))
    _add(store, "income", "50.00", "salary", date(2024, 2, 1))

    summary = StatsEngine(store).summarize()

    # Decimal sums: 1000 * 0.10 is exactly 100.00
    assert summary.total_expenses == Decimal("100.00")
    assert summary.net_income == summary.total_income - summary.total_expenses
    assert sum(summary.expenses_by_category.values()) == summary.total_expenses
    assert "salary" not in summary.expenses_by_category


def test_summary_net_can_be_negative():
    store = MemoryTransactionStore()
    _add(store, "income", "10.00", "salary", date(2024, 3, 1))
    _add(store, "expense", "25.50", "bills", date(2024, 3, 2))
    assert StatsEngine(store).summarize().net_income == Decimal("-15.50")


def test_summary_reflects_latest_store_state():
    store = MemoryTransactionStore()
    stats = StatsEngine(store)
    tx = _add(store, "expense", "5.00", "food", date(2024, 3, 1))
    assert stats.summarize().total_expenses == Decimal("5.00")

    store.delete(tx.id)
    assert stats.summarize().total_expenses == Decimal("0.00")


# ---- Trends --------------------------------------------------------------------------


def test_month_key_is_zero_padded():
    assert month_key(date(2024, 3, 9)) == "2024-03"
    assert month_key(date(987, 12, 1)) == "0987-12"


def test_trends_bucket_by_month_sorted_without_gaps():
    store = MemoryTransactionStore()
    _add(store, "expense", "85.40", "food", date(2024, 10, 15))
    _add(store, "income", "100.00", "salary", date(2024, 10, 1))
    _add(store, "expense", "1.00", "food", date(2024, 12, 31))
    _add(store, "income", "2.50", "freelance", date(2023, 12, 5))

    trends = StatsEngine(store).trends()

    assert [t.month for t in trends] == ["2023-12", "2024-10", "2024-12"]
    assert trends[0].income == Decimal("2.50") and trends[0].expenses == 0
    assert trends[1].income == Decimal("100.00")
    assert trends[1].expenses == Decimal("85.40")
    assert trends[2].income == 0 and trends[2].expenses == Decimal("1.00")


def test_trends_have_unique_ascending_months(seeded_store):
    trends = StatsEngine(seeded_store).trends()
    months = [t.month for t in trends]
    assert months == sorted(months)
    assert len(months) == len(set(months))
    assert trends == [
        MonthlyTrend(month="2024-10", income=Decimal("5050.00"), expenses=Decimal("251.05"))
    ]


def test_trends_of_empty_store():
    assert StatsEngine(MemoryTransactionStore()).trends() == []


# ---- CSV export ------------------------------------------------------------------------


def test_csv_export_single_transaction_exact():
    store = MemoryTransactionStore()
    _add(store, "expense", "85.40", "food", date(2024, 10, 15), "Grocery Shopping")

    assert StatsEngine(store).export_csv() == (
        "Date,Type,Category,Description,Amount\n"
        '2024-10-15,expense,food,"Grocery Shopping",85.40'
    )


def test_csv_export_orders_newest_first_and_quotes_missing_description(seeded_store):
    _add(seeded_store, "income", "1", "gift", date(2024, 11, 1))

    lines = StatsEngine(seeded_store).export_csv().split("\n")

    assert lines[0] == "Date,Type,Category,Description,Amount"
    assert lines[1] == '2024-11-01,income,gift,"",1.00'
    assert lines[-1] == '2024-10-10,expense,bills,"Electric Bill",120.45'
    assert len(lines) == 7


def test_csv_export_empty_store_is_header_only():
    assert StatsEngine(MemoryTransactionStore()).export_csv() == "Date,Type,Category,Description,Amount"


def test_csv_legacy_format_does_not_escape():
    store = MemoryTransactionStore()
    _add(store, "expense", "3.00", "food", date(2024, 1, 1), 'Tea, "green"')

    line = StatsEngine(store).export_csv().split("\n")[1]
    assert line == '2024-01-01,expense,food,"Tea, "green"",3.00'


def test_csv_rfc4180_escapes_quotes_and_commas():
    store = MemoryTransactionStore()
    _add(store, "expense", "3.00", "food", date(2024, 1, 1), 'Tea, "green"')
    _add(store, "income", "9.99", "salary", date(2023, 1, 1))

    assert StatsEngine(store).export_csv(rfc4180=True) == (
        "Date,Type,Category,Description,Amount\n"
        '2024-01-01,expense,food,"Tea, ""green""",3.00\n'
        "2023-01-01,income,salary,,9.99\n"
    )
