import cmd
from datetime import date
from functools import partial
from typing import Callable

from fintrack.console import print_error, print_success, print_table, print_warning
from fintrack.graph_menu import GraphMenu
from fintrack.inputs import (
    parse_amount,
    parse_category_id,
    parse_date,
    parse_description,
    prompt_until_valid,
)
from fintrack.logic import Ledger
from fintrack.models import TransactionKind, EXPENSE, INCOME
from fintrack.storage import save_ledger


class FinanceTrackerCLI(cmd.Cmd):
    prompt = "(fintrack) "

    def __init__(
            self,
            ledger: Ledger,
            read: Callable[[str], str] = input,
            today: Callable[[], date] = date.today,
            data_dir=None,
    ):
        super().__init__()
        self.intro = "Welcome to fintrack. Type 'help' for commands."
        self.ledger = ledger
        self.read = read
        self.today = today
        self.data_dir = data_dir

    def emptyline(self):
        # don't repeat the previous command
        return False

    # ===== CATEGORIES =====
    def do_category(self, arg):
        """Manage categories: category <add NAME|edit ID NAME|delete ID|list>"""
        args = arg.split()
        if not args:
            self.help_category()
            return

        try:
            action = args[0]
            if action == "add":
                category = self.ledger.categories.add(" ".join(args[1:]))
                print_success(f"✓ Added category {category.id}: {category.name}")
            elif action == "edit":
                category_id = self._parse_id(args)
                if self.ledger.categories.rename(category_id, " ".join(args[2:])):
                    print_success("Category updated successfully.")
                else:
                    print_warning("Category not found.")
            elif action == "delete":
                if self.ledger.delete_category(self._parse_id(args)):
                    print_success("Category deleted successfully.")
                else:
                    print_warning("Category not found.")
            elif action == "list":
                self._show_categories()
            else:
                self.help_category()
        except ValueError as e:
            print_error(f"Invalid input: {e}")
        except Exception as e:
            print_error(f"Error: {e}")

    def help_category(self):
        print("Usage:\n  category add <name>\n  category edit <id> <new name>\n"
              "  category delete <id>\n  category list")

    # ===== TRANSACTIONS =====
    def do_expense(self, arg):
        """Manage expenses: expense <add|edit ID|delete ID|list>"""
        self._transaction_command(EXPENSE, arg)

    def do_income(self, arg):
        """Manage incomes: income <add|edit ID|delete ID|list>"""
        self._transaction_command(INCOME, arg)

    def _transaction_command(self, kind: TransactionKind, arg: str):
        args = arg.split()
        if not args:
            print(f"Usage:\n  {kind} add\n  {kind} edit <id>\n  {kind} delete <id>\n  {kind} list")
            return

        try:
            action = args[0]
            if action == "add":
                self._add_transaction(kind)
            elif action == "edit":
                self._edit_transaction(kind, self._parse_id(args))
            elif action == "delete":
                if self.ledger.store(kind).delete(self._parse_id(args)):
                    print_success(f"{kind.capitalize()} deleted successfully.")
                else:
                    print_warning(f"{kind.capitalize()} not found.")
            elif action == "list":
                self._show_transactions(kind)
            else:
                print("Invalid command")
        except EOFError:
            print()
            print_warning(f"No more input, {kind} {action} cancelled.")
        except ValueError as e:
            print_error(f"Invalid input: {e}")
        except Exception as e:
            print_error(f"Error: {e}")

    def _add_transaction(self, kind: TransactionKind):
        if self.ledger.categories.is_empty():
            print_warning("There are no categories available. Please add a category first.")
            return

        description = prompt_until_valid(f"Enter {kind} description: ", parse_description, self.read)
        amount = prompt_until_valid(f"Enter {kind} amount: ", parse_amount, self.read)
        created = prompt_until_valid(
            f"Enter {kind} date (eg 2024/04/12): ",
            partial(parse_date, today=self.today()),
            self.read,
        )
        self._show_categories()
        category_id = prompt_until_valid(
            "Enter category ID: ",
            partial(parse_category_id, categories=self.ledger.categories),
            self.read,
        )

        transaction = self.ledger.add_transaction(kind, description, amount, category_id, created)
        print_success(f"✓ Added {kind} {transaction.id} of {transaction.amount:.2f}")

    def _edit_transaction(self, kind: TransactionKind, transaction_id: int):
        t = self.ledger.store(kind).get(transaction_id)
        if t is None:
            print_warning(f"{kind.capitalize()} not found.")
            return

        keep = "(press enter to keep existing)"
        description = prompt_until_valid(
            f"Enter new description {keep}: ", partial(parse_description, default=t.description), self.read
        )
        amount = prompt_until_valid(
            f"Enter new amount {keep}: ", partial(parse_amount, default=t.amount), self.read
        )
        created = prompt_until_valid(
            f"Enter new date (eg 2024/04/12) {keep}: ",
            partial(parse_date, today=self.today(), default=t.created),
            self.read,
        )
        self._show_categories()
        category_id = prompt_until_valid(
            f"Enter new category ID {keep}: ",
            partial(parse_category_id, categories=self.ledger.categories, default=t.category_id),
            self.read,
        )

        self.ledger.store(kind).edit(
            transaction_id,
            description=description,
            amount=amount,
            category_id=category_id,
            created=created,
        )
        print_success(f"{kind.capitalize()} updated successfully.")

    # ===== GRAPHS =====
    def do_graph(self, arg):
        """Chart expenses and incomes per day: graph"""
        try:
            GraphMenu(self.ledger, read=self.read, today=self.today).run_graph_menu()
        except ValueError as e:
            print_error(f"Invalid input: {e}")
        except Exception as e:
            print_error(f"Error: {e}")

    # ===== DATA MANAGEMENT =====
    def do_save(self, arg):
        """Save categories, expenses and incomes to disk"""
        if save_ledger(self.ledger, self.data_dir):
            print_success("✓ Saved")

    def do_exit(self, arg):
        """Save and exit the program"""
        self.do_save(arg)
        print("Exiting fintrack. See you again.")
        return True

    def do_EOF(self, arg):
        print()
        return self.do_exit(arg)

    # ===== HELPERS =====
    @staticmethod
    def _parse_id(args: list[str]) -> int:
        if len(args) < 2:
            raise ValueError("Missing ID")
        try:
            return int(args[1])
        except ValueError:
            raise ValueError(f"ID must be a number, got {args[1]!r}")

    def _show_categories(self):
        categories = self.ledger.categories.list()
        if not categories:
            print_warning("No Categories to display.")
            return
        print_table("Categories", ["Id", "Name"], ([cat.id, cat.name] for cat in categories))

    def _show_transactions(self, kind: TransactionKind):
        transactions = self.ledger.store(kind).list()
        if not transactions:
            print_warning(f"No {kind.capitalize()}s to display.")
            return
        print_table(
            f"{kind.capitalize()}s",
            ["Id", "Description", "Amount", "Category", "Created Date"],
            (
                [t.id, t.description, f"{t.amount:.2f}",
                 f"{t.category_id} ({self.ledger.categories.name_of(t.category_id)})",
                 t.created.isoformat()]
                for t in transactions
            ),
        )
