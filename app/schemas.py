# app/schemas.py
# Role: Pydantic request/response models for the JSON API.
#       Input shapes are validated here, before anything reaches the store.

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.services.stats import MonthlyTrend, Summary
from app.services.store import Transaction, TransactionInput, TransactionType, to_amount, to_date


# -------------------------------------------------------------------
# Requests
# -------------------------------------------------------------------

class TransactionCreate(BaseModel):
    type: TransactionType
    amount: Decimal
    category: str = Field(min_length=1)
    date: dt.date
    description: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Decimal:
        return to_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> dt.date:
        return to_date(v)

    def to_input(self) -> TransactionInput:
        return TransactionInput(
            type=self.type,
            amount=self.amount,
            category=self.category,
            date=self.date,
            description=self.description,
        )


class TransactionUpdate(BaseModel):
    """Partial update: only the fields the client actually sent are applied."""

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.date] = None
    description: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Optional[Decimal]:
        return None if v is None else to_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Optional[dt.date]:
        return None if v is None else to_date(v)

    @model_validator(mode="after")
    def _no_nulls(self) -> "TransactionUpdate":
        # Only description may be cleared with an explicit null
        for name in self.model_fields_set - {"description"}:
            if getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self

    def to_changes(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


# -------------------------------------------------------------------
# Responses
# -------------------------------------------------------------------

class TransactionOut(BaseModel):
    id: str
    type: TransactionType
    amount: str
    category: str
    date: str
    description: Optional[str]

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionOut":
        return cls(**tx.to_dict())


class SummaryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_income: float
    total_expenses: float
    net_income: float
    expenses_by_category: Dict[str, float]

    @classmethod
    def from_domain(cls, summary: Summary) -> "SummaryOut":
        return cls(
            total_income=float(summary.total_income),
            total_expenses=float(summary.total_expenses),
            net_income=float(summary.net_income),
            expenses_by_category={k: float(v) for k, v in summary.expenses_by_category.items()},
        )


class MonthlyTrendOut(BaseModel):
    month: str
    income: float
    expenses: float

    @classmethod
    def from_domain(cls, trend: MonthlyTrend) -> "MonthlyTrendOut":
        return cls(month=trend.month, income=float(trend.income), expenses=float(trend.expenses))


class DeleteResult(BaseModel):
    success: bool


class ErrorOut(BaseModel):
    error: str
    details: Optional[List[Any]] = None
