from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Literal


TransactionKind = Literal["expense", "income"]
TimeRange = Literal["daily", "weekly", "monthly", "total"]

EXPENSE: TransactionKind = "expense"
INCOME: TransactionKind = "income"


@dataclass
class Category:
    id: int
    name: str


@dataclass
class Transaction:
    id: int
    description: str
    amount: float
    category_id: int
    created: date
    kind: TransactionKind = EXPENSE


@dataclass(frozen=True)
class DateBucket:
    day: date
    expense_total: float = 0.0
    income_total: float = 0.0
