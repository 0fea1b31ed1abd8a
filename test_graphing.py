import unittest
from datetime import date, timedelta

from fintrack.graphing import (
    BAR_WIDTH, EXPENSE_GLYPH, INCOME_GLYPH,
    aggregate, bar_length, in_range, range_window, render, select_transactions
)
from fintrack.models import DateBucket, Transaction


TODAY = date(2024, 4, 15)  # a Monday


def expense(t_id, amount, created, category_id=1, desc="Expense"):
    return Transaction(t_id, desc, amount, category_id, created, kind="expense")


def income(t_id, amount, created, category_id=1, desc="Income"):
    return Transaction(t_id, desc, amount, category_id, created, kind="income")


class TestRangeClassifier(unittest.TestCase):
    def test_total_includes_everything(self):
        """Total range accepts any date"""
        for day in (date(1999, 1, 1), TODAY, date(2100, 12, 31)):
            self.assertTrue(in_range(day, "total", TODAY))

    def test_daily(self):
        """Daily range is today only"""
        self.assertTrue(in_range(TODAY, "daily", TODAY))
        self.assertFalse(in_range(TODAY - timedelta(days=1), "daily", TODAY))
        self.assertFalse(in_range(TODAY + timedelta(days=1), "daily", TODAY))

    def test_weekly_window_starts_on_monday(self):
        """Weekly window for Monday 2024-04-15 is 15th to 21st"""
        self.assertEqual(range_window("weekly", TODAY), (date(2024, 4, 15), date(2024, 4, 21)))
        self.assertTrue(in_range(date(2024, 4, 21), "weekly", TODAY))
        self.assertFalse(in_range(date(2024, 4, 14), "weekly", TODAY))
        self.assertFalse(in_range(date(2024, 4, 22), "weekly", TODAY))

    def test_weekly_window_is_seven_days_around_today(self):
        """Every weekday of a week yields the same 7-day window containing it"""
        for offset in range(7):
            today = date(2024, 4, 15) + timedelta(days=offset)
            start, end = range_window("weekly", today)
            self.assertEqual((end - start).days, 6)
            self.assertEqual(start, date(2024, 4, 15))
            self.assertTrue(start <= today <= end)

    def test_weekly_window_crosses_month(self):
        """Week of Wednesday 2024-05-01 starts in April"""
        self.assertEqual(range_window("weekly", date(2024, 5, 1)), (date(2024, 4, 29), date(2024, 5, 5)))

    def test_monthly(self):
        """Monthly range covers the whole calendar month"""
        self.assertEqual(range_window("monthly", TODAY), (date(2024, 4, 1), date(2024, 4, 30)))
        self.assertTrue(in_range(date(2024, 4, 1), "monthly", TODAY))
        self.assertTrue(in_range(date(2024, 4, 30), "monthly", TODAY))
        self.assertFalse(in_range(date(2024, 3, 31), "monthly", TODAY))
        self.assertFalse(in_range(date(2024, 5, 1), "monthly", TODAY))

    def test_monthly_leap_february_and_december(self):
        """Month end handles leap years and year rollover"""
        self.assertEqual(range_window("monthly", date(2024, 2, 10)), (date(2024, 2, 1), date(2024, 2, 29)))
        self.assertEqual(range_window("monthly", date(2023, 12, 31)), (date(2023, 12, 1), date(2023, 12, 31)))

    def test_labels_are_case_insensitive(self):
        """Range labels ignore case"""
        self.assertTrue(in_range(TODAY, "Daily", TODAY))
        self.assertTrue(in_range(TODAY, "TOTAL", TODAY))

    def test_unknown_range_is_false(self):
        """Unrecognized ranges never match and never raise"""
        self.assertFalse(in_range(TODAY, "yearly", TODAY))
        self.assertFalse(in_range(TODAY, "", TODAY))
        self.assertFalse(in_range(TODAY, None, TODAY))
        self.assertIsNone(range_window("yearly", TODAY))


class TestAggregator(unittest.TestCase):
    def test_single_expense(self):
        """One expense gives one bucket with zero income"""
        buckets = aggregate([expense(1, 5.00, date(2024, 4, 10), desc="Coffee")], [], "total", TODAY)
        self.assertEqual(buckets, [DateBucket(date(2024, 4, 10), 5.00, 0.0)])

    def test_same_day_expenses_are_summed(self):
        """Expenses on one day add up"""
        day = date(2024, 4, 12)
        buckets = aggregate([expense(1, 10.0, day), expense(2, 20.0, day)], [], "total", TODAY)
        self.assertEqual(len(buckets), 1)
        self.assertEqual(buckets[0].expense_total, 30.0)

    def test_union_of_dates_sorted(self):
        """Days from both kinds are merged, ascending, zero filled"""
        expenses = [expense(1, 4.0, date(2024, 4, 12)), expense(2, 6.0, date(2024, 4, 1))]
        incomes = [income(1, 100.0, date(2024, 4, 5)), income(2, 50.0, date(2024, 4, 12))]

        buckets = aggregate(expenses, incomes, "total", TODAY)

        self.assertEqual([b.day for b in buckets], [date(2024, 4, 1), date(2024, 4, 5), date(2024, 4, 12)])
        self.assertEqual(buckets[0], DateBucket(date(2024, 4, 1), 6.0, 0.0))
        self.assertEqual(buckets[1], DateBucket(date(2024, 4, 5), 0.0, 100.0))
        self.assertEqual(buckets[2], DateBucket(date(2024, 4, 12), 4.0, 50.0))

    def test_dates_strictly_ascending(self):
        """No duplicate days even with many transactions"""
        expenses = [expense(i, 1.0, date(2024, 4, 1 + i % 5)) for i in range(1, 20)]
        incomes = [income(i, 2.0, date(2024, 4, 3 + i % 4)) for i in range(1, 10)]
        days = [b.day for b in aggregate(expenses, incomes, "total", TODAY)]
        self.assertEqual(days, sorted(set(days)))

    def test_range_filter(self):
        """Only transactions in the window count"""
        expenses = [expense(1, 10.0, TODAY), expense(2, 20.0, TODAY - timedelta(days=1))]
        incomes = [income(1, 5.0, date(2024, 3, 31))]

        daily = aggregate(expenses, incomes, "daily", TODAY)
        self.assertEqual(daily, [DateBucket(TODAY, 10.0, 0.0)])

        monthly = aggregate(expenses, incomes, "monthly", TODAY)
        self.assertEqual([b.day for b in monthly], [date(2024, 4, 14), TODAY])

    def test_category_filter(self):
        """Category filter applies to both kinds"""
        day = date(2024, 4, 10)
        expenses = [expense(1, 10.0, day, category_id=1), expense(2, 20.0, day, category_id=2)]
        incomes = [income(1, 7.0, day, category_id=2), income(2, 9.0, day, category_id=3)]

        buckets = aggregate(expenses, incomes, "total", TODAY, category_id=2)

        self.assertEqual(buckets, [DateBucket(day, 20.0, 7.0)])

    def test_unreferenced_category_gives_empty(self):
        """Filtering by a category nothing uses yields nothing"""
        expenses = [expense(1, 10.0, date(2024, 4, 10), category_id=1)]
        self.assertEqual(aggregate(expenses, [], "total", TODAY, category_id=2), [])

    def test_empty_inputs(self):
        """No transactions, no buckets"""
        self.assertEqual(aggregate([], [], "total", TODAY), [])

    def test_unknown_range_gives_empty(self):
        """An unknown range filters everything out"""
        self.assertEqual(aggregate([expense(1, 1.0, TODAY)], [], "yearly", TODAY), [])

    def test_filter_is_idempotent(self):
        """Re-aggregating the selected transactions gives the same buckets"""
        expenses = [
            expense(1, 10.0, date(2024, 4, 10), category_id=1),
            expense(2, 3.5, date(2024, 4, 15), category_id=2),
            expense(3, 8.0, date(2024, 3, 2), category_id=1),
        ]
        incomes = [income(1, 40.0, date(2024, 4, 10), category_id=1)]

        first = aggregate(expenses, incomes, "monthly", TODAY, category_id=1)
        selected_expenses = list(select_transactions(expenses, "monthly", TODAY, 1))
        selected_incomes = list(select_transactions(incomes, "monthly", TODAY, 1))
        second = aggregate(selected_expenses, selected_incomes, "monthly", TODAY, category_id=1)

        self.assertEqual(first, second)
        self.assertEqual(first, [DateBucket(date(2024, 4, 10), 10.0, 40.0)])

    def test_select_preserves_order(self):
        """Selection keeps insertion order"""
        expenses = [expense(3, 1.0, TODAY), expense(1, 1.0, TODAY), expense(2, 1.0, TODAY)]
        self.assertEqual([t.id for t in select_transactions(expenses, "daily", TODAY)], [3, 1, 2])


class TestRenderer(unittest.TestCase):
    def test_single_bucket_full_bar(self):
        """The largest total gets the full bar width"""
        lines = render([DateBucket(date(2024, 4, 10), 5.00, 0.0)])
        self.assertEqual(lines, [
            "2024-04-10",
            f"{'Expense : 5.00':<20} | {EXPENSE_GLYPH * BAR_WIDTH}",
            "",
        ])

    def test_shared_scale(self):
        """Expense and income bars share one scale"""
        lines = render([DateBucket(date(2024, 4, 10), 50.0, 100.0)])
        self.assertEqual(lines[1], f"{'Expense : 50.00':<20} | {EXPENSE_GLYPH * 15}")
        self.assertEqual(lines[2], f"{'Income : 100.00':<20} | {INCOME_GLYPH * 30}")

    def test_small_total_has_no_bar(self):
        """A total that rounds down to zero glyphs is left out"""
        lines = render([
            DateBucket(date(2024, 4, 1), 100.0, 0.0),
            DateBucket(date(2024, 4, 2), 1.0, 0.0),
        ])
        self.assertEqual(lines[3:], ["2024-04-02", ""])

    def test_zero_scale_headers_only(self):
        """All-zero totals print headers and no bars"""
        lines = render([DateBucket(date(2024, 4, 1)), DateBucket(date(2024, 4, 2))])
        self.assertEqual(lines, ["2024-04-01", "", "2024-04-02", ""])

    def test_empty(self):
        """Nothing to render"""
        self.assertEqual(render([]), [])

    def test_category_in_header(self):
        """Category name follows the date when filtering"""
        lines = render([DateBucket(date(2024, 4, 10), 5.0, 0.0)], category_name="Food")
        self.assertEqual(lines[0], "2024-04-10 - Food")

    def test_explicit_scale(self):
        """A caller-supplied scale overrides the computed one"""
        lines = render([DateBucket(date(2024, 4, 10), 5.0, 0.0)], scale=10.0)
        self.assertEqual(lines[1], f"{'Expense : 5.00':<20} | {EXPENSE_GLYPH * 15}")

    def test_bar_length(self):
        """Bar length floors and never divides by zero"""
        self.assertEqual(bar_length(5.0, 5.0), 30)
        self.assertEqual(bar_length(3.0, 4.0), 22)
        self.assertEqual(bar_length(1.0, 7.0), 4)
        self.assertEqual(bar_length(1.0, 0.0), 0)


if __name__ == "__main__":
    unittest.main()
