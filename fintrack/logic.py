from __future__ import annotations
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fintrack.models import Category, Transaction, TransactionKind, EXPENSE, INCOME


UNKNOWN_CATEGORY = "Unknown"


def _next_id(items) -> int:
    return max((item.id for item in items), default=0) + 1


def check_description(description: str) -> str:
    if not description or not description.strip():
        raise ValueError("Description must not be empty")
    return description


def check_amount(amount: float) -> float:
    amount = float(amount)
    if not math.isfinite(amount) or amount <= 0:
        raise ValueError("Amount must be a positive number")
    return amount


class CategoryDirectory:
    def __init__(self, categories: Optional[list[Category]] = None):
        self.categories: list[Category] = list(categories or [])

    def list(self) -> list[Category]:
        return self.categories

    def is_empty(self) -> bool:
        return not self.categories

    def get(self, category_id: int) -> Optional[Category]:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None

    def is_valid(self, category_id: int) -> bool:
        return self.get(category_id) is not None

    def name_of(self, category_id: int) -> str:
        cat = self.get(category_id)
        return cat.name if cat else UNKNOWN_CATEGORY

    def add(self, name: str) -> Category:
        if not name or not name.strip():
            raise ValueError("Category name must not be empty")
        category = Category(_next_id(self.categories), name.strip())
        self.categories.append(category)
        return category

    def rename(self, category_id: int, name: str) -> bool:
        if not name or not name.strip():
            raise ValueError("Category name must not be empty")
        cat = self.get(category_id)
        if cat is None:
            return False
        cat.name = name.strip()
        return True

    def delete(self, category_id: int, *stores: "TransactionStore") -> bool:
        """Remove a category unless a transaction in any of ``stores`` still uses it."""
        cat = self.get(category_id)
        if cat is None:
            return False
        if any(store.uses_category(category_id) for store in stores):
            raise ValueError("Category is being used by expenses or incomes. It cannot be deleted.")
        self.categories.remove(cat)
        return True


class TransactionStore:
    def __init__(self, kind: TransactionKind, transactions: Optional[list[Transaction]] = None):
        self.kind = kind
        self.transactions: list[Transaction] = list(transactions or [])

    def list(self) -> list[Transaction]:
        return self.transactions

    def is_empty(self) -> bool:
        return not self.transactions

    def next_id(self) -> int:
        return _next_id(self.transactions)

    def get(self, transaction_id: int) -> Optional[Transaction]:
        for t in self.transactions:
            if t.id == transaction_id:
                return t
        return None

    def uses_category(self, category_id: int) -> bool:
        return any(t.category_id == category_id for t in self.transactions)

    def add(self, description: str, amount: float, category_id: int, created: date) -> Transaction:
        transaction = Transaction(
            id=self.next_id(),
            description=check_description(description),
            amount=check_amount(amount),
            category_id=category_id,
            created=created,
            kind=self.kind,
        )
        self.transactions.append(transaction)
        return transaction

    def edit(
            self,
            transaction_id: int,
            description: Optional[str] = None,
            amount: Optional[float] = None,
            category_id: Optional[int] = None,
            created: Optional[date] = None,
    ) -> bool:
        t = self.get(transaction_id)
        if t is None:
            return False

        # validate everything before touching the record
        if description is not None:
            description = check_description(description)
        if amount is not None:
            amount = check_amount(amount)

        if description is not None:
            t.description = description
        if amount is not None:
            t.amount = amount
        if category_id is not None:
            t.category_id = category_id
        if created is not None:
            t.created = created
        return True

    def delete(self, transaction_id: int) -> bool:
        for i, t in enumerate(self.transactions):
            if t.id == transaction_id:
                self.transactions.pop(i)
                return True
        return False


@dataclass
class Ledger:
    categories: CategoryDirectory = field(default_factory=CategoryDirectory)
    expenses: TransactionStore = field(default_factory=lambda: TransactionStore(EXPENSE))
    incomes: TransactionStore = field(default_factory=lambda: TransactionStore(INCOME))

    def store(self, kind: TransactionKind) -> TransactionStore:
        if kind == EXPENSE:
            return self.expenses
        if kind == INCOME:
            return self.incomes
        raise ValueError(f"Unknown transaction kind: {kind}")

    def is_empty(self) -> bool:
        return self.expenses.is_empty() and self.incomes.is_empty()

    def add_transaction(
            self,
            kind: TransactionKind,
            description: str,
            amount: float,
            category_id: int,
            created: date,
    ) -> Transaction:
        if not self.categories.is_valid(category_id):
            raise ValueError(f"Category not found: {category_id}")
        return self.store(kind).add(description, amount, category_id, created)

    def delete_category(self, category_id: int) -> bool:
        return self.categories.delete(category_id, self.expenses, self.incomes)
