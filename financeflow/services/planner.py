from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from financeflow.models.enums import Priority, RecurringInterval, TodoStatus, TransactionType
from financeflow.services.entities import Goal, RecurringItem, Todo
from financeflow.services.normalize import ZERO, to_amount

HUNDRED = Decimal("100")
PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class TodoSort(str, Enum):
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    CREATED = "created"


@dataclass(frozen=True, slots=True)
class GoalStats:
    total: int
    active: int
    completed: int
    total_saved: Decimal
    total_target: Decimal


@dataclass(frozen=True, slots=True)
class TodoStats:
    total: int
    active: int
    completed: int
    overdue: int


@dataclass(frozen=True, slots=True)
class RecurringSummary:
    total: int
    active: int
    monthly_income: Decimal
    monthly_expense: Decimal


def goal_progress(goal: Goal) -> Decimal:
    target = to_amount(goal.target_amount)
    if target <= 0:
        return ZERO
    return min(to_amount(goal.current_amount) / target * HUNDRED, HUNDRED)


def apply_goal_funds(goal: Goal, amount: Any, now: dt.datetime | None = None) -> dict[str, Any]:
    """Column updates for adding ``amount`` to a goal.

    ``completed_at`` is only written the first time the target is reached and
    is never cleared here.
    """
    value = to_amount(amount)
    if value <= 0:
        raise ValueError("Amount must be greater than zero")

    new_amount = to_amount(goal.current_amount) + value
    updates: dict[str, Any] = {"current_amount": new_amount}
    if goal.completed_at is None and new_amount >= to_amount(goal.target_amount):
        updates["completed_at"] = now or dt.datetime.now(dt.timezone.utc)
    return updates


def apply_goal_update(goal: Goal, values: dict[str, Any], now: dt.datetime | None = None) -> dict[str, Any]:
    """Edited goal columns, plus ``completed_at`` when a new target is already met."""
    updates = dict(values)
    target = updates.get("target_amount")
    if goal.completed_at is None and target is not None and to_amount(goal.current_amount) >= to_amount(target):
        updates["completed_at"] = now or dt.datetime.now(dt.timezone.utc)
    return updates


def goal_stats(goals: Sequence[Goal]) -> GoalStats:
    completed = sum(1 for goal in goals if goal.is_completed)
    return GoalStats(
        total=len(goals),
        active=len(goals) - completed,
        completed=completed,
        total_saved=sum((to_amount(goal.current_amount) for goal in goals), ZERO),
        total_target=sum((to_amount(goal.target_amount) for goal in goals), ZERO),
    )


def _is_overdue(todo: Todo, today: str) -> bool:
    return todo.status == TodoStatus.ACTIVE and bool(todo.due_date) and todo.due_date < today


def todo_stats(todos: Sequence[Todo], today: dt.date | None = None) -> TodoStats:
    today_key = (today or dt.date.today()).isoformat()
    active = sum(1 for todo in todos if todo.status == TodoStatus.ACTIVE)
    return TodoStats(
        total=len(todos),
        active=active,
        completed=len(todos) - active,
        overdue=sum(1 for todo in todos if _is_overdue(todo, today_key)),
    )


def sort_todos(
    todos: Iterable[Todo],
    by: TodoSort | str = TodoSort.PRIORITY,
    status: TodoStatus | None = None,
) -> list[Todo]:
    items = [todo for todo in todos if status is None or todo.status == status]
    order = TodoSort(by)

    if order == TodoSort.PRIORITY:
        return sorted(items, key=lambda todo: PRIORITY_ORDER[todo.priority])
    if order == TodoSort.DUE_DATE:
        return sorted(items, key=lambda todo: (todo.due_date is None, todo.due_date or ""))
    return sorted(items, key=lambda todo: todo.created_at or "", reverse=True)


def quick_todos(todos: Iterable[Todo], limit: int = 5) -> list[Todo]:
    active = [todo for todo in todos if todo.status == TodoStatus.ACTIVE]
    active.sort(key=lambda todo: (todo.due_date is None, todo.due_date or "", PRIORITY_ORDER[todo.priority]))
    return active[: max(0, limit)]


def recurring_summary(items: Sequence[RecurringItem]) -> RecurringSummary:
    active = [item for item in items if item.is_active]
    monthly = [item for item in active if item.interval == RecurringInterval.MONTHLY]
    return RecurringSummary(
        total=len(items),
        active=len(active),
        monthly_income=sum(
            (to_amount(item.amount) for item in monthly if item.type == TransactionType.INCOME), ZERO
        ),
        monthly_expense=sum(
            (to_amount(item.amount) for item in monthly if item.type == TransactionType.EXPENSE), ZERO
        ),
    )


def upcoming_recurring(
    items: Iterable[RecurringItem],
    today: dt.date | None = None,
    days: int = 7,
) -> list[RecurringItem]:
    horizon = ((today or dt.date.today()) + dt.timedelta(days=days)).isoformat()
    due = [item for item in items if item.is_active and item.next_date and item.next_date <= horizon]
    return sorted(due, key=lambda item: item.next_date or "")
