# app/routes_dashboard.py

from fastapi import APIRouter, Depends, Query, Request

from .deps import get_stats, get_store, templates
from app.services.presentation import (
    CATEGORY_LABELS,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    category_shares,
)
from app.services.query_helpers import filter_transactions
from app.services.stats import StatsEngine
from app.services.store import TransactionStore

router = APIRouter()


@router.get("/dashboard")
def dashboard_page(
    request: Request,
    search: str = Query(""),
    category: str = Query(""),
    store: TransactionStore = Depends(get_store),
    stats: StatsEngine = Depends(get_stats),
):
    summary = stats.summarize()
    trends = stats.trends()

    # "all" (or nothing) means no category filter
    if category and category != "all":
        transactions = store.get_by_category(category)
    else:
        transactions = store.get_all()
    transactions = filter_transactions(transactions, search=search)

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "summary": summary,
            "trends": trends,
            "spending_by_category": category_shares(summary.expenses_by_category),
            "transactions": transactions,
            "search": search,
            "selected_category": category,
            "category_labels": CATEGORY_LABELS,
            "income_categories": INCOME_CATEGORIES,
            "expense_categories": EXPENSE_CATEGORIES,
        },
    )
