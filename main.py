# main.py
# Role: Application entry point and composition root for the finance tracker.
#       Builds the single TransactionStore for the process, registers error
#       handlers and mounts all route modules.

"""
Main FastAPI app for the personal finance tracker.

Here we only:
- configure logging
- build the transaction store (memory or SQL) and optionally seed it
- map errors to JSON bodies
- include route modules

Run with: uvicorn main:app
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, load_settings
from app.logging_setup import configure_logging, get_logger
from app.routes_dashboard import router as dashboard_router
from app.routes_root import router as root_router
from app.routes_transactions import router as transactions_router
from app.services.sample_data import seed_sample_data
from app.services.sql_store import SqlTransactionStore
from app.services.store import MemoryTransactionStore, TransactionStore

logger = get_logger("finance_tracker.main")


# -------------------------------------------------------------------
# Store setup
# -------------------------------------------------------------------

def build_store(settings: Settings) -> TransactionStore:
    if settings.storage == "sql":
        store: TransactionStore = SqlTransactionStore.from_url(settings.database_url)
    else:
        store = MemoryTransactionStore()

    if settings.seed_sample_data:
        seeded = seed_sample_data(store)
        if seeded:
            logger.info("seeded %d sample transactions", seeded)

    logger.info("using %s transaction store (%d transactions)", settings.storage, store.count())
    return store


# -------------------------------------------------------------------
# Error handlers
# -------------------------------------------------------------------

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    in_body = any((err.get("loc") or [""])[0] == "body" for err in errors)
    message = "Invalid transaction data" if in_body else "Invalid request parameters"
    return JSONResponse(status_code=400, content={"error": message, "details": errors})


# -------------------------------------------------------------------
# App factory
# -------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None, store: Optional[TransactionStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    ``store`` overrides the backend chosen by ``settings`` (handy for tests);
    otherwise exactly one store is built here and kept on ``app.state``.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.store.close()

    app = FastAPI(title="Finance Tracker", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Root / landing + health
    app.include_router(root_router)

    # JSON API (CRUD, stats, CSV export)
    app.include_router(transactions_router)

    # Dashboard (summary cards, category breakdown, trends, filtered list)
    app.include_router(dashboard_router)

    return app


app = create_app()
