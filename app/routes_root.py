# routes_root.py
"""
Root / basic endpoints (health, landing).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from app.deps import get_store
from app.services.store import TransactionStore

router = APIRouter()


@router.get("/")
def read_root():
    """Landing endpoint: send the browser to the dashboard."""
    return RedirectResponse(url="/dashboard", status_code=302)


@router.get("/health")
def health(store: TransactionStore = Depends(get_store)):
    return {"status": "ok", "transactions": store.count()}
