import csv
import os
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator, Optional

from fintrack.console import print_error, print_warning
from fintrack.logic import CategoryDirectory, Ledger, TransactionStore, check_amount, check_description
from fintrack.models import Category, Transaction, TransactionKind, EXPENSE, INCOME


DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", "."))

CATEGORY_FILE = "categories.txt"
EXPENSE_FILE = "expenses.txt"
INCOME_FILE = "incomes.txt"


def _read_rows(path: Path) -> list[list[str]]:
    if not path.exists():
        return []
    try:
        with path.open(newline="", encoding="utf-8") as f:
            return list(csv.reader(f))
    except (OSError, csv.Error) as e:
        print_error(f"Error loading {path.name}: {e}")
        return []


def _write_rows(path: Path, rows: Iterable[Iterable]) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as f:
            csv.writer(f, lineterminator="\n").writerows(rows)
        return True
    except OSError as e:
        print_error(f"Error saving {path.name}: {e}")
        return False


def _rows_of_width(path: Path, width: int, label: str) -> Iterator[list[str]]:
    for line_no, row in enumerate(_read_rows(path), start=1):
        if not row:
            continue
        if len(row) != width:
            print_warning(f"Warning: Skipping {label} in row {line_no}: "
                          f"expected {width} fields, got {len(row)}")
            continue
        yield row


def load_categories(path: Path) -> list[Category]:
    categories = []
    seen = set()
    for row in _rows_of_width(path, 2, "category"):
        try:
            category = Category(id=int(row[0]), name=row[1].strip())
            if not category.name:
                raise ValueError("Category name must not be empty")
        except ValueError as e:
            print_warning(f"Warning: Skipping invalid category {row[0]!r}: {e}")
            continue
        if category.id in seen:
            print_warning(f"Warning: Skipping duplicate category id {category.id}")
            continue
        seen.add(category.id)
        categories.append(category)
    return categories


def save_categories(categories: Iterable[Category], path: Path) -> bool:
    return _write_rows(path, ([cat.id, cat.name] for cat in categories))


def load_transactions(path: Path, kind: TransactionKind) -> list[Transaction]:
    """Read ``id,description,amount,category_id,YYYY-MM-DD`` rows.

    Blank lines are ignored. Rows with the wrong number of fields, values
    that do not parse or break the store's rules (empty description,
    amount not a positive finite number) and repeated ids are skipped
    with a warning.
    """
    transactions = []
    seen = set()
    for row in _rows_of_width(path, 5, kind):
        try:
            transaction = Transaction(
                id=int(row[0]),
                description=check_description(row[1]),
                amount=check_amount(row[2]),
                category_id=int(row[3]),
                created=date.fromisoformat(row[4]),
                kind=kind,
            )
        except ValueError as e:
            print_warning(f"Warning: Skipping invalid {kind} {row[0]!r}: {e}")
            continue
        if transaction.id in seen:
            print_warning(f"Warning: Skipping duplicate {kind} id {transaction.id}")
            continue
        seen.add(transaction.id)
        transactions.append(transaction)
    return transactions


def save_transactions(transactions: Iterable[Transaction], path: Path) -> bool:
    return _write_rows(path, (
        [t.id, t.description, repr(t.amount), t.category_id, t.created.isoformat()]
        for t in transactions
    ))


def load_ledger(data_dir: Optional[Path] = None) -> Ledger:
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
    return Ledger(
        categories=CategoryDirectory(load_categories(data_dir / CATEGORY_FILE)),
        expenses=TransactionStore(EXPENSE, load_transactions(data_dir / EXPENSE_FILE, EXPENSE)),
        incomes=TransactionStore(INCOME, load_transactions(data_dir / INCOME_FILE, INCOME)),
    )


def save_ledger(ledger: Ledger, data_dir: Optional[Path] = None) -> bool:
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
    # write every file even when an earlier one fails
    results = [
        save_categories(ledger.categories.list(), data_dir / CATEGORY_FILE),
        save_transactions(ledger.expenses.list(), data_dir / EXPENSE_FILE),
        save_transactions(ledger.incomes.list(), data_dir / INCOME_FILE),
    ]
    return all(results)
