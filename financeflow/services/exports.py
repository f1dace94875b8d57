from __future__ import annotations

import csv
import datetime as dt
import io
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from financeflow.schemas.budget import BudgetRead
from financeflow.schemas.category import CategoryRead
from financeflow.schemas.todo import TodoRead
from financeflow.schemas.transaction import TransactionRead
from financeflow.services.entities import Budget, Category, Todo, Transaction
from financeflow.services.normalize import to_amount

CSV_HEADERS = ("Date", "Type", "Category", "Amount", "Note", "Payment Method")


def transactions_csv(transactions: Sequence[Transaction], categories: Sequence[Category]) -> str:
    names = {category.id: category.name for category in categories}
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for transaction in transactions:
        writer.writerow(
            (
                transaction.date,
                transaction.type.value,
                names.get(transaction.category_id, "") if transaction.category_id else "",
                to_amount(transaction.amount),
                transaction.note,
                transaction.payment_method.value,
            )
        )
    return buffer.getvalue()


def export_snapshot(
    *,
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    todos: Sequence[Todo],
    categories: Sequence[Category],
    currency: str,
    initial_balance: Decimal,
    now: dt.datetime | None = None,
) -> dict[str, Any]:
    """JSON-ready backup of the user's data, one list per entity."""
    exported_at = now or dt.datetime.now(dt.timezone.utc)
    return {
        "transactions": [TransactionRead.model_validate(item).model_dump(mode="json") for item in transactions],
        "budgets": [BudgetRead.model_validate(item).model_dump(mode="json") for item in budgets],
        "todos": [TodoRead.model_validate(item).model_dump(mode="json") for item in todos],
        "categories": [CategoryRead.model_validate(item).model_dump(mode="json") for item in categories],
        "settings": {"currency": currency, "initial_balance": str(to_amount(initial_balance))},
        "exportedAt": exported_at.isoformat(),
    }


def csv_filename(today: dt.date | None = None) -> str:
    return f"transactions-{(today or dt.date.today()).isoformat()}.csv"


def snapshot_filename(today: dt.date | None = None) -> str:
    return f"financeflow-export-{(today or dt.date.today()).isoformat()}.json"
