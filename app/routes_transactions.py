# routes_transactions.py
"""
JSON API for transactions: CRUD, list filters, summary/trend statistics and CSV export.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.deps import get_stats, get_store
from app.logging_setup import get_logger
from app.schemas import (
    DeleteResult,
    MonthlyTrendOut,
    SummaryOut,
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
)
from app.services.query_helpers import (
    filter_transactions,
    get_month_range,
    parse_optional_date,
    parse_optional_decimal,
    sort_transactions,
)
from app.services.stats import StatsEngine
from app.services.store import TransactionStore, TransactionType

router = APIRouter(prefix="/api/transactions")
logger = get_logger("finance_tracker.routes")

NOT_FOUND = "Transaction not found"


# -------------------------------------------------------------------
# Statistics & export (declared before /{transaction_id})
# -------------------------------------------------------------------

@router.get("/stats/summary", response_model=SummaryOut)
def stats_summary(stats: StatsEngine = Depends(get_stats)):
    try:
        return SummaryOut.from_domain(stats.summarize())
    except Exception:
        logger.exception("summary calculation failed")
        raise HTTPException(status_code=500, detail="Failed to calculate statistics")


@router.get("/stats/trends", response_model=List[MonthlyTrendOut])
def stats_trends(stats: StatsEngine = Depends(get_stats)):
    try:
        return [MonthlyTrendOut.from_domain(t) for t in stats.trends()]
    except Exception:
        logger.exception("trend calculation failed")
        raise HTTPException(status_code=500, detail="Failed to fetch trends data")


@router.get("/export/csv")
def export_csv(
    rfc4180: bool = Query(False),
    stats: StatsEngine = Depends(get_stats),
):
    try:
        content = stats.export_csv(rfc4180=rfc4180)
    except Exception:
        logger.exception("CSV export failed")
        raise HTTPException(status_code=500, detail="Failed to export transactions")

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=transactions.csv"},
    )


# -------------------------------------------------------------------
# List & CRUD
# -------------------------------------------------------------------

@router.get("", response_model=List[TransactionOut])
def list_transactions(
    type: Optional[TransactionType] = Query(None),
    category: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    min_amount: str = Query(""),
    max_amount: str = Query(""),
    sort: str = Query("date"),
    dir: str = Query("desc"),
    store: TransactionStore = Depends(get_store),
):
    try:
        range_start = parse_optional_date(start_date)
        range_end = parse_optional_date(end_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date filter; expected YYYY-MM-DD")

    # An explicit start/end range wins over month
    if range_start is None and range_end is None:
        range_start, range_end, _ = get_month_range(month)

    try:
        if range_start is not None or range_end is not None:
            transactions = store.get_by_date_range(range_start or date.min, range_end or date.max)
        elif category:
            transactions = store.get_by_category(category)
        elif type is not None:
            transactions = store.get_by_type(type)
        else:
            transactions = store.get_all()

        if category:
            transactions = [t for t in transactions if t.category == category]
        if type is not None:
            transactions = [t for t in transactions if t.type == type]

        transactions = filter_transactions(
            transactions,
            search=search,
            min_amount=parse_optional_decimal(min_amount),
            max_amount=parse_optional_decimal(max_amount),
        )
        transactions = sort_transactions(transactions, sort, dir)
        return [TransactionOut.from_domain(t) for t in transactions]
    except Exception:
        logger.exception("listing transactions failed")
        raise HTTPException(status_code=500, detail="Failed to fetch transactions")


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)):
    try:
        tx = store.get_by_id(transaction_id)
    except Exception:
        logger.exception("fetching transaction %s failed", transaction_id)
        raise HTTPException(status_code=500, detail="Failed to fetch transaction")

    if tx is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return TransactionOut.from_domain(tx)


@router.post("", response_model=TransactionOut, status_code=201)
def create_transaction(payload: TransactionCreate, store: TransactionStore = Depends(get_store)):
    try:
        tx = store.create(payload.to_input())
    except Exception:
        logger.exception("creating transaction failed")
        raise HTTPException(status_code=500, detail="Failed to create transaction")

    logger.info("transaction created id=%s", tx.id)
    return TransactionOut.from_domain(tx)


@router.put("/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    store: TransactionStore = Depends(get_store),
):
    try:
        tx = store.update(transaction_id, payload.to_changes())
    except Exception:
        logger.exception("updating transaction %s failed", transaction_id)
        raise HTTPException(status_code=500, detail="Failed to update transaction")

    if tx is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return TransactionOut.from_domain(tx)


@router.delete("/{transaction_id}", response_model=DeleteResult)
def delete_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)):
    try:
        deleted = store.delete(transaction_id)
    except Exception:
        logger.exception("deleting transaction %s failed", transaction_id)
        raise HTTPException(status_code=500, detail="Failed to delete transaction")

    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return DeleteResult(success=True)
