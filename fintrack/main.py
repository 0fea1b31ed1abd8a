from fintrack.cli import FinanceTrackerCLI
from fintrack.storage import DATA_DIR, load_ledger


BANNER = """\
*------------------------------------------------------------------------------------------*
|                                  Welcome To fintrack                                     |
|                          Track your expenses anywhere, everywhere                        |
*------------------------------------------------------------------------------------------*"""


def main():
    print(BANNER)
    ledger = load_ledger(DATA_DIR)
    print(f"✓ Loaded {len(ledger.categories.list())} categories, "
          f"{len(ledger.expenses.list())} expenses, {len(ledger.incomes.list())} incomes")
    FinanceTrackerCLI(ledger, data_dir=DATA_DIR).cmdloop()


if __name__ == "__main__":
    main()
