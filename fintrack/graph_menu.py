from datetime import date
from functools import partial
from typing import Callable, Optional

from fintrack.console import print_warning
from fintrack.graphing import DAILY, WEEKLY, MONTHLY, TOTAL, aggregate, render
from fintrack.inputs import parse_category_id, parse_menu_choice, parse_yes_no, prompt_until_valid
from fintrack.logic import Ledger
from fintrack.models import TimeRange


TIME_RANGE_CHOICES = {1: DAILY, 2: WEEKLY, 3: MONTHLY, 4: TOTAL}
BACK_CHOICE = 5

MENU = """
*------------------------------------------------------------------------------------------*
|                                      Graph Menu                                          |
|                                                                                          |
|   Daily (1)     Weekly (2)     Monthly (3)     All Time (4)     Back to Main Menu (5)    |
*------------------------------------------------------------------------------------------*"""


class GraphMenu:
    """Interactive loop that charts the ledger over a chosen time range."""

    def __init__(
            self,
            ledger: Ledger,
            read: Callable[[str], str] = input,
            today: Callable[[], date] = date.today,
    ):
        self.ledger = ledger
        self.read = read
        self.today = today

    def run_graph_menu(self) -> None:
        if self.ledger.is_empty():
            print_warning("Couldn't find any income or expense yet.")
            return

        print(MENU)
        choices = list(TIME_RANGE_CHOICES) + [BACK_CHOICE]
        try:
            while True:
                choice = prompt_until_valid(
                    "Enter your choice: ", partial(parse_menu_choice, choices=choices), self.read
                )
                if choice == BACK_CHOICE:
                    return
                self.generate_graph(TIME_RANGE_CHOICES[choice])
                print()
        except EOFError:
            print()
            print_warning("No more input, returning to the main menu.")

    def generate_graph(self, time_range: TimeRange) -> None:
        category_id = self.prompt_category_filter()
        category_name = self.ledger.categories.name_of(category_id) if category_id is not None else None

        buckets = aggregate(
            self.ledger.expenses.list(),
            self.ledger.incomes.list(),
            time_range,
            self.today(),
            category_id,
        )
        print()
        if not buckets:
            print_warning("Nothing to display for this time range.")
            return
        for line in render(buckets, category_name):
            print(line)

    def prompt_category_filter(self) -> Optional[int]:
        """Return the category id to filter by, or None for no filter."""
        if not prompt_until_valid("Filter by Category? (Yes/No): ", parse_yes_no, self.read):
            return None
        return prompt_until_valid(
            "Enter category ID: ",
            partial(parse_category_id, categories=self.ledger.categories),
            self.read,
        )
