from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from app.services.store import (
    MemoryTransactionStore,
    TransactionInput,
    TransactionType,
    to_amount,
    to_date,
)


def _input(**overrides) -> TransactionInput:
    fields = {
        "type": TransactionType.expense,
        "amount": Decimal("10.00"),
        "category": "food",
        "date": date(2024, 10, 15),
        "description": "Lunch",
    }
    fields.update(overrides)
    return TransactionInput(**fields)


# ---- Value normalization -----------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("85.40", Decimal("85.40")),
        ("85.4", Decimal("85.40")),
        (85.4, Decimal("85.40")),
        (4200, Decimal("4200.00")),
        ("0", Decimal("0.00")),
        ("1.005", Decimal("1.01")),
        ("-0", Decimal("0.00")),
        ("9999999999.99", Decimal("9999999999.99")),
    ],
)
def test_to_amount_quantizes_to_cents(raw, expected):
    amount = to_amount(raw)
    assert amount == expected
    assert not amount.is_signed()
    assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize("raw", ["-1.00", "abc", "NaN", "Infinity", True, None, "1e30", "10000000000.00", "-0.001"])
def test_to_amount_rejects_invalid(raw):
    with pytest.raises(ValueError):
        to_amount(raw)


def test_to_date_requires_fixed_width_iso():
    assert to_date("2024-10-05") == date(2024, 10, 5)
    assert to_date(date(2024, 1, 2)) == date(2024, 1, 2)
    for bad in ("2024-1-5", "20241005", "10/15/2024", "2024-02-30"):
        with pytest.raises(ValueError):
            to_date(bad)


# ---- CRUD ---------------------------------------------------------------------


def test_create_assigns_unique_ids_and_normalizes(store):
    a = store.create(_input(description=""))
    b = store.create(_input(description=None, amount="3.5"))

    assert a.id != b.id
    assert a.description is None
    assert b.description is None
    assert b.amount == Decimal("3.50")
    assert store.get_by_id(a.id) == a
    assert store.count() == 2


def test_get_by_id_unknown_is_none(store):
    assert store.get_by_id("missing") is None


def test_get_all_is_newest_first_with_stable_ties(store):
    first = store.create(_input(date=date(2024, 10, 10), description="first"))
    newest = store.create(_input(date=date(2024, 11, 1)))
    second = store.create(_input(date=date(2024, 10, 10), description="second"))
    oldest = store.create(_input(date=date(2023, 1, 1)))

    ids = [t.id for t in store.get_all()]
    assert ids == [newest.id, first.id, second.id, oldest.id]
    # Same order on every call
    assert [t.id for t in store.get_all()] == ids


def test_empty_store_returns_empty_list(store):
    assert store.get_all() == []


def test_update_merges_only_provided_fields(store):
    tx = store.create(_input(description="Lunch"))

    updated = store.update(tx.id, {"amount": "12.5", "category": "dining"})

    assert updated is not None
    assert updated.id == tx.id
    assert updated.amount == Decimal("12.50")
    assert updated.category == "dining"
    assert updated.description == "Lunch"
    assert updated.date == tx.date
    assert updated.type is TransactionType.expense
    assert store.get_by_id(tx.id) == updated


def test_update_can_clear_description_and_change_type(store):
    tx = store.create(_input())
    updated = store.update(tx.id, {"description": None, "type": "income"})
    assert updated.description is None
    assert updated.type is TransactionType.income


def test_update_unknown_id_returns_none_without_mutation(store):
    store.create(_input())
    before = store.get_all()

    assert store.update("does-not-exist", {"amount": "1.00"}) is None
    assert store.get_all() == before
    assert store.count() == 1


def test_update_rejects_id_changes(store):
    tx = store.create(_input())
    with pytest.raises(ValueError):
        store.update(tx.id, {"id": "other"})
    assert store.get_by_id(tx.id) == tx


def test_delete(store):
    keep = store.create(_input())
    drop = store.create(_input())

    assert store.delete("missing") is False
    assert store.delete(drop.id) is True
    assert store.delete(drop.id) is False
    assert [t.id for t in store.get_all()] == [keep.id]


def test_net_state_after_mixed_operations(store):
    a = store.create(_input(description="a", date=date(2024, 1, 1)))
    b = store.create(_input(description="b", date=date(2024, 1, 2)))
    c = store.create(_input(description="c", date=date(2024, 1, 3)))
    store.update(a.id, {"description": "a2"})
    store.delete(b.id)
    store.update(c.id, {"date": "2023-12-31"})

    assert [(t.id, t.description) for t in store.get_all()] == [(a.id, "a2"), (c.id, "c")]


# ---- Filtered reads ---------------------------------------------------------------


def test_get_by_date_range_is_inclusive(seeded_store):
    result = seeded_store.get_by_date_range("2024-10-12", "2024-10-14")
    assert [t.date.isoformat() for t in result] == ["2024-10-14", "2024-10-13", "2024-10-12"]

    assert seeded_store.get_by_date_range(date(2024, 10, 15), date(2024, 10, 15))[0].category == "food"
    assert seeded_store.get_by_date_range("2025-01-01", "2025-12-31") == []


def test_get_by_date_range_rejects_other_formats(seeded_store):
    with pytest.raises(ValueError):
        seeded_store.get_by_date_range("10/01/2024", "2024-10-31")


def test_get_by_type_preserves_order(seeded_store):
    income = seeded_store.get_by_type("income")
    assert [t.category for t in income] == ["freelance", "salary"]
    expenses = seeded_store.get_by_type(TransactionType.expense)
    assert [t.category for t in expenses] == ["food", "transportation", "bills"]


def test_get_by_category(seeded_store):
    assert [t.description for t in seeded_store.get_by_category("bills")] == ["Electric Bill"]
    assert seeded_store.get_by_category("unknown") == []


# ---- Snapshots & concurrency ----------------------------------------------------------


def test_snapshots_are_read_only(store):
    tx = store.create(_input())
    with pytest.raises(AttributeError):
        tx.amount = Decimal("1.00")  # type: ignore[misc]


def test_concurrent_creates_are_not_lost():
    store = MemoryTransactionStore()

    def worker():
        for _ in range(50):
            store.create(_input())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count() == 400
    assert len({t.id for t in store.get_all()}) == 400
