"""Field parsers for interactive prompts.

Every parser takes the raw line the user typed and returns a ``ParseResult``
holding either the parsed value or the message to show before asking again.
``prompt_until_valid`` is the loop that ties a prompt to a parser.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from fintrack.console import print_error
from fintrack.logic import CategoryDirectory


T = TypeVar("T")

DATE_INPUT_FORMAT = "%Y/%m/%d"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(value: Any) -> ParseResult:
    return ParseResult(value=value)


def failure(message: str) -> ParseResult:
    return ParseResult(error=message)


def parse_description(text: str, default: Optional[str] = None) -> ParseResult[str]:
    text = text.strip()
    if text:
        return success(text)
    if default:
        return success(default)
    return failure("Invalid description. Please provide a description.")


def parse_amount(text: str, default: Optional[float] = None) -> ParseResult[float]:
    text = text.strip()
    if not text:
        if default is not None:
            return success(default)
        return failure("Invalid amount. Please enter a valid number for the amount.")
    try:
        amount = float(text)
    except ValueError:
        return failure("Invalid amount. Please enter a valid positive number for the amount.")
    # float() accepts "nan" and "inf"
    if not amount > 0 or amount == float("inf"):
        return failure("Invalid amount. Please enter a valid positive number for the amount.")
    return success(amount)


def parse_date(text: str, today: date, default: Optional[date] = None) -> ParseResult[date]:
    """Parse a ``YYYY/MM/DD`` date that is not after ``today``."""
    text = text.strip()
    if not text:
        if default is not None:
            return success(default)
        return failure("Invalid date. Please enter the date in the format YYYY/MM/DD.")
    try:
        value = datetime.strptime(text, DATE_INPUT_FORMAT).date()
    except ValueError:
        return failure("Invalid date. Please enter the date in the format YYYY/MM/DD.")
    if value > today:
        return failure("Invalid date. Please don't enter future date.")
    return success(value)


def parse_category_id(
        text: str,
        categories: CategoryDirectory,
        default: Optional[int] = None,
) -> ParseResult[int]:
    text = text.strip()
    message = "Invalid category ID. Please select a valid category ID from the table above."
    if not text:
        return success(default) if default is not None else failure(message)
    try:
        category_id = int(text)
    except ValueError:
        return failure(message)
    if not categories.is_valid(category_id):
        return failure("Category not found.")
    return success(category_id)


def parse_menu_choice(text: str, choices: Iterable[int]) -> ParseResult[int]:
    try:
        choice = int(text.strip())
    except ValueError:
        return failure("Invalid choice. Please try again.")
    if choice not in choices:
        return failure("Invalid choice. Please try again.")
    return success(choice)


def parse_yes_no(text: str) -> ParseResult[bool]:
    answer = text.strip().lower()
    if answer == "yes":
        return success(True)
    if answer == "no":
        return success(False)
    return failure("Invalid choice, Please try again.")


def prompt_until_valid(
        prompt: str,
        parser: Callable[[str], ParseResult[T]],
        read: Callable[[str], str] = input,
) -> T:
    """Ask with ``prompt`` until ``parser`` accepts the answer.

    There is no retry limit. ``EOFError`` from ``read`` propagates.
    """
    while True:
        result = parser(read(prompt))
        if result.ok:
            return result.value
        print_error(result.error)
