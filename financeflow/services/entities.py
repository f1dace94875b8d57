from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from financeflow.models.enums import (
    CategoryType,
    NotificationType,
    PaymentMethod,
    Priority,
    RecurringInterval,
    TodoStatus,
    TransactionType,
)


@dataclass(frozen=True, slots=True)
class Transaction:
    id: str
    date: str
    type: TransactionType
    category_id: str | None
    amount: Decimal
    payment_method: PaymentMethod = PaymentMethod.CASH
    note: str = ""
    tags: tuple[str, ...] = ()
    recurring_id: str | None = None
    created_at: str | None = None


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    type: CategoryType
    icon: str = "💸"
    color: str = "gray"
    is_default: bool = False


@dataclass(frozen=True, slots=True)
class Budget:
    id: str
    category_id: str | None
    amount: Decimal
    month: str


@dataclass(frozen=True, slots=True)
class Goal:
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: str | None = None
    icon: str = "🎯"
    color: str = "#06b6d4"
    created_at: str | None = None
    completed_at: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass(frozen=True, slots=True)
class Todo:
    id: str
    title: str
    priority: Priority = Priority.MEDIUM
    status: TodoStatus = TodoStatus.ACTIVE
    description: str | None = None
    due_date: str | None = None
    created_at: str | None = None
    completed_at: str | None = None


@dataclass(frozen=True, slots=True)
class RecurringItem:
    id: str
    name: str
    type: TransactionType
    amount: Decimal
    interval: RecurringInterval
    next_date: str | None
    is_active: bool = True
    category_id: str | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    note: str = ""


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    reference_id: str | None = None
    created_at: str | None = None


@dataclass(frozen=True, slots=True)
class Profile:
    id: str
    email: str
    currency: str
    name: str | None = None
    initial_balance: Decimal = Decimal("0")
    is_active: bool | None = None
    activated_at: str | None = None
