import datetime as dt
from decimal import Decimal

from financeflow.models.enums import CategoryType, PaymentMethod, TransactionType
from financeflow.services.entities import Budget, Category, Todo, Transaction
from financeflow.services.exports import csv_filename, export_snapshot, snapshot_filename, transactions_csv

FOOD = Category(id="food", name="Food & Dining", type=CategoryType.EXPENSE)


def test_transactions_csv_quotes_fields_and_blanks_unknown_categories() -> None:
    transactions = (
        Transaction(
            id="1",
            date="2024-06-05",
            type=TransactionType.EXPENSE,
            category_id="food",
            amount=Decimal("300"),
            note="Lunch, with team",
            payment_method=PaymentMethod.E_WALLET,
        ),
        Transaction(id="2", date="2024-06-06", type=TransactionType.EXPENSE, category_id="gone", amount=Decimal("5")),
    )

    lines = transactions_csv(transactions, (FOOD,)).splitlines()

    assert lines == [
        "Date,Type,Category,Amount,Note,Payment Method",
        '2024-06-05,expense,Food & Dining,300,"Lunch, with team",e-wallet',
        "2024-06-06,expense,,5,,cash",
    ]


def test_export_snapshot_is_json_ready() -> None:
    now = dt.datetime(2024, 6, 30, 12, 0, tzinfo=dt.timezone.utc)

    snapshot = export_snapshot(
        transactions=(
            Transaction(id="1", date="2024-06-05", type=TransactionType.INCOME, category_id=None, amount=Decimal("10")),
        ),
        budgets=(Budget(id="b1", category_id="food", amount=Decimal("400"), month="2024-06"),),
        todos=(Todo(id="t1", title="Pay bills"),),
        categories=(FOOD,),
        currency="IDR",
        initial_balance=Decimal("1500"),
        now=now,
    )

    assert snapshot["settings"] == {"currency": "IDR", "initial_balance": "1500"}
    assert snapshot["exportedAt"] == "2024-06-30T12:00:00+00:00"
    assert snapshot["transactions"][0]["type"] == "income"
    assert snapshot["budgets"][0]["month"] == "2024-06"
    assert snapshot["todos"][0]["status"] == "active"
    assert snapshot["categories"][0]["name"] == "Food & Dining"


def test_export_filenames_use_the_date() -> None:
    assert csv_filename(dt.date(2024, 6, 30)) == "transactions-2024-06-30.csv"
    assert snapshot_filename(dt.date(2024, 6, 30)) == "financeflow-export-2024-06-30.json"
