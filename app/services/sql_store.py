# app/services/sql_store.py
#
# SQL Transaction Store
# TransactionStore implementation persisted through SQLAlchemy (SQLite by default).
# Each operation runs in its own session/transaction via db.session_scope.

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, List, Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Query, Session

from app.logging_setup import get_logger
from app.services.store import (
    Transaction,
    TransactionInput,
    TransactionStore,
    TransactionType,
    build_transaction,
    normalize_changes,
    to_amount,
    to_date,
)
from db import Base, make_engine, make_session_factory, session_scope
from models import TransactionRecord

logger = get_logger("finance_tracker.sql_store")


def _to_domain(row: TransactionRecord) -> Transaction:
    return Transaction(
        id=row.id,
        type=TransactionType(row.type),
        amount=to_amount(row.amount),
        category=row.category,
        date=row.date,
        description=row.description,
    )


class SqlTransactionStore(TransactionStore):
    """
    Store backed by the ``transactions`` table.

    Date ties are ordered by the insertion sequence column, matching the
    in-memory store's stable ordering.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = make_session_factory(engine)
        # Create the table (only if it doesn't exist yet)
        Base.metadata.create_all(bind=engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlTransactionStore":
        return cls(make_engine(database_url))

    def _ordered(self, session: Session) -> Query:
        return session.query(TransactionRecord).order_by(
            TransactionRecord.date.desc(),
            TransactionRecord.seq.asc(),
        )

    def get_all(self) -> List[Transaction]:
        with session_scope(self._session_factory) as session:
            return [_to_domain(row) for row in self._ordered(session).all()]

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        with session_scope(self._session_factory) as session:
            row = session.query(TransactionRecord).filter(TransactionRecord.id == tx_id).first()
            return _to_domain(row) if row is not None else None

    def count(self) -> int:
        with session_scope(self._session_factory) as session:
            return session.query(TransactionRecord).count()

    def create(self, data: TransactionInput) -> Transaction:
        tx = build_transaction(str(uuid.uuid4()), data)
        row = TransactionRecord(
            id=tx.id,
            type=tx.type.value,
            amount=tx.amount,
            category=tx.category,
            date=tx.date,
            description=tx.description,
        )
        with session_scope(self._session_factory) as session:
            session.add(row)

        logger.debug("created transaction id=%s type=%s", tx.id, tx.type.value)
        return tx

    def update(self, tx_id: str, changes: Mapping[str, Any]) -> Optional[Transaction]:
        normalized = normalize_changes(changes)
        with session_scope(self._session_factory) as session:
            row = session.query(TransactionRecord).filter(TransactionRecord.id == tx_id).first()
            if row is None:
                return None
            for field, value in normalized.items():
                if field == "type":
                    value = value.value
                setattr(row, field, value)
            session.flush()
            updated = _to_domain(row)

        logger.debug("updated transaction id=%s fields=%s", tx_id, sorted(normalized))
        return updated

    def delete(self, tx_id: str) -> bool:
        with session_scope(self._session_factory) as session:
            removed = (
                session.query(TransactionRecord)
                .filter(TransactionRecord.id == tx_id)
                .delete(synchronize_session=False)
            )

        if removed:
            logger.debug("deleted transaction id=%s", tx_id)
        return bool(removed)

    # Filtered reads run in SQL, keeping the get_all() ordering.

    def get_by_date_range(self, start: date | str, end: date | str) -> List[Transaction]:
        start_d, end_d = to_date(start), to_date(end)
        with session_scope(self._session_factory) as session:
            rows = (
                self._ordered(session)
                .filter(TransactionRecord.date >= start_d, TransactionRecord.date <= end_d)
                .all()
            )
            return [_to_domain(row) for row in rows]

    def get_by_type(self, tx_type: TransactionType | str) -> List[Transaction]:
        wanted = TransactionType(tx_type)
        with session_scope(self._session_factory) as session:
            rows = self._ordered(session).filter(TransactionRecord.type == wanted.value).all()
            return [_to_domain(row) for row in rows]

    def get_by_category(self, category: str) -> List[Transaction]:
        with session_scope(self._session_factory) as session:
            rows = self._ordered(session).filter(TransactionRecord.category == category).all()
            return [_to_domain(row) for row in rows]

    def close(self) -> None:
        self._engine.dispose()
