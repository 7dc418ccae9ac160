# app/deps.py
# Role: Shared application-level dependencies.
#       Provides the Jinja2 templates loader and the FastAPI dependencies that hand
#       routes the store (owned by the app, see main.create_app) and a StatsEngine over it.

"""
Shared dependencies for the finance tracker app.
"""

import os

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from app.services.presentation import category_color, category_label, format_currency, format_date
from app.services.stats import StatsEngine
from app.services.store import TransactionStore

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

# Jinja2 templates loader (used by the HTML dashboard)
templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["currency"] = format_currency
templates.env.filters["pretty_date"] = format_date
templates.env.filters["category_label"] = category_label
templates.env.filters["category_color"] = category_color

# -------------------------------------------------------------------
# Store & stats dependencies
# -------------------------------------------------------------------

def get_store(request: Request) -> TransactionStore:
    """
    FastAPI dependency returning the app's single TransactionStore.

    Typical usage in routes:
        store: TransactionStore = Depends(get_store)
    """
    return request.app.state.store


def get_stats(store: TransactionStore = Depends(get_store)) -> StatsEngine:
    return StatsEngine(store)
