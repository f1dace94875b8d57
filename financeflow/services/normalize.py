"""Conversion of raw gateway rows into typed entities.

Rows arrive as plain mappings whose fields may be missing, ``None``, or carry
numbers encoded as strings. Everything downstream of this module works on the
frozen entities from :mod:`financeflow.services.entities` only.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from financeflow.models.enums import (
    CategoryType,
    NotificationType,
    PaymentMethod,
    Priority,
    RecurringInterval,
    TodoStatus,
    TransactionType,
)
from financeflow.services.entities import (
    Budget,
    Category,
    Goal,
    Notification,
    Profile,
    RecurringItem,
    Todo,
    Transaction,
)

ZERO = Decimal("0")

EnumT = TypeVar("EnumT", bound=Enum)
EntityT = TypeVar("EntityT")

Row = Mapping[str, Any]


def to_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite():
        return ZERO
    return amount


def to_date_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    text = str(value).strip()
    return text[:10] or None


def to_timestamp_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def to_month(value: Any) -> str:
    date_string = to_date_string(value)
    return date_string[:7] if date_string else ""


def coerce_enum(enum_cls: type[EnumT], value: Any, default: EnumT) -> EnumT:
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def normalize_transaction(row: Row) -> Transaction:
    tags = row.get("tags") or ()
    return Transaction(
        id=_text(row.get("id")),
        date=to_date_string(row.get("date")) or "",
        type=coerce_enum(TransactionType, row.get("type"), TransactionType.EXPENSE),
        category_id=_optional_text(row.get("category_id")),
        amount=to_amount(row.get("amount")),
        payment_method=coerce_enum(PaymentMethod, row.get("payment_method"), PaymentMethod.CASH),
        note=_text(row.get("note")),
        tags=tuple(str(tag) for tag in tags),
        recurring_id=_optional_text(row.get("recurring_id")),
        created_at=to_timestamp_string(row.get("created_at")),
    )


def normalize_category(row: Row) -> Category:
    return Category(
        id=_text(row.get("id")),
        name=_text(row.get("name")),
        type=coerce_enum(CategoryType, row.get("type"), CategoryType.BOTH),
        icon=_text(row.get("icon")) or "💸",
        color=_text(row.get("color")) or "gray",
        is_default=bool(row.get("is_default")),
    )


def normalize_budget(row: Row) -> Budget:
    # A stored "spent" value is derived data and intentionally not read.
    return Budget(
        id=_text(row.get("id")),
        category_id=_optional_text(row.get("category_id")),
        amount=to_amount(row.get("amount")),
        month=to_month(row.get("month")),
    )


def normalize_goal(row: Row) -> Goal:
    return Goal(
        id=_text(row.get("id")),
        name=_text(row.get("name")),
        target_amount=to_amount(row.get("target_amount")),
        current_amount=to_amount(row.get("current_amount")),
        deadline=to_date_string(row.get("deadline")),
        icon=_text(row.get("icon")) or "🎯",
        color=_text(row.get("color")) or "#06b6d4",
        created_at=to_timestamp_string(row.get("created_at")),
        completed_at=to_timestamp_string(row.get("completed_at")),
    )


def normalize_todo(row: Row) -> Todo:
    return Todo(
        id=_text(row.get("id")),
        title=_text(row.get("title")),
        priority=coerce_enum(Priority, row.get("priority"), Priority.MEDIUM),
        status=coerce_enum(TodoStatus, row.get("status"), TodoStatus.ACTIVE),
        description=_optional_text(row.get("description")),
        due_date=to_date_string(row.get("due_date")),
        created_at=to_timestamp_string(row.get("created_at")),
        completed_at=to_timestamp_string(row.get("completed_at")),
    )


def normalize_recurring(row: Row) -> RecurringItem:
    return RecurringItem(
        id=_text(row.get("id")),
        name=_text(row.get("name")),
        type=coerce_enum(TransactionType, row.get("type"), TransactionType.EXPENSE),
        amount=to_amount(row.get("amount")),
        interval=coerce_enum(RecurringInterval, row.get("interval"), RecurringInterval.MONTHLY),
        next_date=to_date_string(row.get("next_date")),
        is_active=row.get("is_active") is not False,
        category_id=_optional_text(row.get("category_id")),
        payment_method=coerce_enum(PaymentMethod, row.get("payment_method"), PaymentMethod.CASH),
        note=_text(row.get("note")),
    )


def normalize_notification(row: Row) -> Notification:
    return Notification(
        id=_text(row.get("id")),
        type=coerce_enum(NotificationType, row.get("type"), NotificationType.BILL_REMINDER),
        title=_text(row.get("title")),
        message=_text(row.get("message")),
        is_read=bool(row.get("is_read")),
        reference_id=_optional_text(row.get("reference_id")),
        created_at=to_timestamp_string(row.get("created_at")),
    )


def normalize_profile(row: Row, default_currency: str = "IDR") -> Profile:
    is_active = row.get("is_active")
    return Profile(
        id=_text(row.get("id")),
        email=_text(row.get("email")),
        currency=_text(row.get("currency")) or default_currency,
        name=_optional_text(row.get("name")),
        initial_balance=to_amount(row.get("initial_balance")),
        is_active=None if is_active is None else bool(is_active),
        activated_at=to_timestamp_string(row.get("activated_at")),
    )


def normalize_rows(rows: Iterable[Row], normalizer: Callable[[Row], EntityT]) -> tuple[EntityT, ...]:
    return tuple(normalizer(row) for row in rows)
