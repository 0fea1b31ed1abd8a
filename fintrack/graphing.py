from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from dateutil.relativedelta import relativedelta

from fintrack.models import DateBucket, TimeRange, Transaction


DAILY: TimeRange = "daily"
WEEKLY: TimeRange = "weekly"
MONTHLY: TimeRange = "monthly"
TOTAL: TimeRange = "total"

BAR_WIDTH = 30
EXPENSE_GLYPH = "\U0001F7E5"
INCOME_GLYPH = "\U0001F7E9"


def range_window(time_range: TimeRange, today: date) -> Optional[tuple[date, date]]:
    """Inclusive (start, end) dates covered by ``time_range`` around ``today``.

    Weeks start on Monday. Returns None for an unrecognized range.
    """
    if not isinstance(time_range, str):
        return None

    label = time_range.lower()
    if label == DAILY:
        return today, today
    if label == WEEKLY:
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if label == MONTHLY:
        start = today.replace(day=1)
        return start, start + relativedelta(months=1) - timedelta(days=1)
    if label == TOTAL:
        return date.min, date.max
    return None


def in_range(day: date, time_range: TimeRange, today: date) -> bool:
    window = range_window(time_range, today)
    if window is None:
        return False
    start, end = window
    return start <= day <= end


def select_transactions(
        transactions: Iterable[Transaction],
        time_range: TimeRange,
        today: date,
        category_id: Optional[int] = None,
) -> Iterator[Transaction]:
    for t in transactions:
        if category_id is not None and t.category_id != category_id:
            continue
        if in_range(t.created, time_range, today):
            yield t


def _sum_by_day(transactions: Iterable[Transaction]) -> dict[date, float]:
    totals: dict[date, float] = {}
    for t in transactions:
        totals[t.created] = totals.get(t.created, 0.0) + t.amount
    return totals


def aggregate(
        expenses: Iterable[Transaction],
        incomes: Iterable[Transaction],
        time_range: TimeRange,
        today: date,
        category_id: Optional[int] = None,
) -> list[DateBucket]:
    """Sum expenses and incomes per day, oldest day first.

    Only transactions inside ``time_range`` (and with ``category_id`` when
    one is given) count. A day that has only one kind gets 0 for the other.
    """
    expense_totals = _sum_by_day(select_transactions(expenses, time_range, today, category_id))
    income_totals = _sum_by_day(select_transactions(incomes, time_range, today, category_id))

    return [
        DateBucket(
            day=day,
            expense_total=expense_totals.get(day, 0.0),
            income_total=income_totals.get(day, 0.0),
        )
        for day in sorted(expense_totals.keys() | income_totals.keys())
    ]


def bar_length(amount: float, scale: float) -> int:
    if scale <= 0:
        return 0
    return int(abs(amount) / scale * BAR_WIDTH)


def format_amount(label: str, amount: float) -> str:
    return f"{label}{amount:.2f}"


def render(
        buckets: Iterable[DateBucket],
        category_name: Optional[str] = None,
        scale: Optional[float] = None,
) -> list[str]:
    """Turn aggregated buckets into printable chart lines.

    Bars are proportional to ``scale``, which defaults to the largest
    expense or income total among ``buckets``; the largest bar is
    ``BAR_WIDTH`` glyphs long. A total too small to fill one glyph gets no
    bar line at all, and a zero scale leaves only the day headers.
    """
    buckets = list(buckets)
    if scale is None:
        max_expense = max((abs(b.expense_total) for b in buckets), default=0.0)
        max_income = max((abs(b.income_total) for b in buckets), default=0.0)
        scale = max(max_expense, max_income)

    lines = []
    for bucket in buckets:
        header = bucket.day.isoformat()
        if category_name:
            header += f" - {category_name}"
        lines.append(header)

        if scale > 0:
            expense_bar = bar_length(bucket.expense_total, scale)
            income_bar = bar_length(bucket.income_total, scale)
            if expense_bar > 0:
                label = format_amount("Expense : ", bucket.expense_total)
                lines.append(f"{label:<20} | {EXPENSE_GLYPH * expense_bar}")
            if income_bar > 0:
                label = format_amount("Income : ", bucket.income_total)
                lines.append(f"{label:<20} | {INCOME_GLYPH * income_bar}")

        lines.append("")
    return lines
