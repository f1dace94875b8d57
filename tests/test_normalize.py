import datetime as dt
from decimal import Decimal

from financeflow.models.enums import CategoryType, PaymentMethod, TransactionType
from financeflow.services.normalize import (
    normalize_budget,
    normalize_category,
    normalize_profile,
    normalize_recurring,
    normalize_transaction,
    to_amount,
    to_date_string,
)


def test_to_amount_degrades_bad_values_to_zero() -> None:
    assert to_amount("12.50") == Decimal("12.50")
    assert to_amount(" 7 ") == Decimal("7")
    assert to_amount(3) == Decimal("3")
    assert to_amount(0.1) == Decimal("0.1")
    assert to_amount(None) == Decimal("0")
    assert to_amount("NaN") == Decimal("0")
    assert to_amount("twelve") == Decimal("0")
    assert to_amount(True) == Decimal("0")


def test_to_date_string_accepts_dates_and_timestamps() -> None:
    assert to_date_string(dt.date(2024, 6, 1)) == "2024-06-01"
    assert to_date_string(dt.datetime(2024, 6, 1, 23, 59)) == "2024-06-01"
    assert to_date_string("2024-06-01T08:00:00Z") == "2024-06-01"
    assert to_date_string(None) is None


def test_normalize_transaction_fills_defaults() -> None:
    transaction = normalize_transaction(
        {"id": 10, "date": "2024-06-05", "type": "Income", "amount": "99.90", "tags": None}
    )

    assert transaction.id == "10"
    assert transaction.type == TransactionType.INCOME
    assert transaction.amount == Decimal("99.90")
    assert transaction.payment_method == PaymentMethod.CASH
    assert transaction.category_id is None
    assert transaction.note == ""
    assert transaction.tags == ()


def test_unknown_transaction_type_counts_as_expense() -> None:
    transaction = normalize_transaction({"id": "1", "date": "2024-06-05", "type": "transfer", "amount": 5})

    assert transaction.type == TransactionType.EXPENSE


def test_normalize_budget_ignores_stored_spent() -> None:
    budget = normalize_budget({"id": "b1", "category_id": "food", "amount": "400", "month": "2024-06", "spent": 9})

    assert budget.amount == Decimal("400")
    assert budget.month == "2024-06"
    assert not hasattr(budget, "spent")


def test_normalize_category_and_recurring_defaults() -> None:
    category = normalize_category({"id": "c1", "name": "Misc", "type": None})
    recurring = normalize_recurring(
        {"id": "r1", "name": "Rent", "type": "expense", "amount": "100", "next_date": "2024-07-01"}
    )

    assert category.type == CategoryType.BOTH
    assert category.icon == "💸"
    assert recurring.is_active is True
    assert recurring.next_date == "2024-07-01"


def test_normalize_profile_uses_default_currency() -> None:
    profile = normalize_profile({"id": "u1", "email": "a@b.c", "currency": None, "is_active": None}, "USD")

    assert profile.currency == "USD"
    assert profile.is_active is None
    assert profile.initial_balance == Decimal("0")
