import datetime as dt
from decimal import Decimal

import pytest

from financeflow.models.enums import Priority, RecurringInterval, TodoStatus, TransactionType
from financeflow.services.entities import Goal, RecurringItem, Todo
from financeflow.services.planner import (
    TodoSort,
    apply_goal_funds,
    goal_progress,
    goal_stats,
    quick_todos,
    recurring_summary,
    sort_todos,
    todo_stats,
    upcoming_recurring,
)

NOW = dt.datetime(2024, 6, 15, 12, 0, tzinfo=dt.timezone.utc)


def test_goal_progress_is_capped() -> None:
    assert goal_progress(Goal(id="g", name="Trip", target_amount=Decimal("200"), current_amount=Decimal("50"))) == 25
    assert goal_progress(Goal(id="g", name="Trip", target_amount=Decimal("200"), current_amount=Decimal("500"))) == 100
    assert goal_progress(Goal(id="g", name="Trip", target_amount=Decimal("0"))) == 0


def test_apply_goal_funds_completes_once() -> None:
    goal = Goal(id="g", name="Trip", target_amount=Decimal("100"), current_amount=Decimal("60"))

    updates = apply_goal_funds(goal, Decimal("40"), now=NOW)

    assert updates == {"current_amount": Decimal("100"), "completed_at": NOW}

    completed = Goal(
        id="g",
        name="Trip",
        target_amount=Decimal("100"),
        current_amount=Decimal("100"),
        completed_at="2024-06-01T00:00:00+00:00",
    )
    assert apply_goal_funds(completed, Decimal("5"), now=NOW) == {"current_amount": Decimal("105")}


def test_apply_goal_funds_rejects_non_positive_amount() -> None:
    goal = Goal(id="g", name="Trip", target_amount=Decimal("100"))

    with pytest.raises(ValueError, match="greater than zero"):
        apply_goal_funds(goal, 0)


def test_goal_stats_counts_completed_goals() -> None:
    goals = (
        Goal(id="a", name="A", target_amount=Decimal("100"), current_amount=Decimal("100"), completed_at="x"),
        Goal(id="b", name="B", target_amount=Decimal("300"), current_amount=Decimal("50")),
    )

    stats = goal_stats(goals)

    assert (stats.total, stats.active, stats.completed) == (2, 1, 1)
    assert stats.total_saved == Decimal("150")
    assert stats.total_target == Decimal("400")


def _todos() -> tuple[Todo, ...]:
    return (
        Todo(id="1", title="low", priority=Priority.LOW, due_date="2024-06-20", created_at="2024-06-01"),
        Todo(id="2", title="high", priority=Priority.HIGH, due_date=None, created_at="2024-06-03"),
        Todo(id="3", title="late", priority=Priority.MEDIUM, due_date="2024-06-10", created_at="2024-06-02"),
        Todo(id="4", title="done", status=TodoStatus.DONE, due_date="2024-06-01", created_at="2024-06-04"),
    )


def test_todo_stats_counts_overdue_active_items() -> None:
    stats = todo_stats(_todos(), today=dt.date(2024, 6, 15))

    assert (stats.total, stats.active, stats.completed, stats.overdue) == (4, 3, 1, 1)


def test_sort_todos_by_each_order() -> None:
    todos = _todos()

    assert [t.id for t in sort_todos(todos, TodoSort.PRIORITY, TodoStatus.ACTIVE)] == ["2", "3", "1"]
    assert [t.id for t in sort_todos(todos, "due_date")] == ["4", "3", "1", "2"]
    assert [t.id for t in sort_todos(todos, TodoSort.CREATED)] == ["4", "2", "3", "1"]


def test_quick_todos_lists_dated_items_first() -> None:
    assert [t.id for t in quick_todos(_todos(), limit=2)] == ["3", "1"]


def _recurring(item_id: str, tx_type: TransactionType, amount: str, **kwargs) -> RecurringItem:
    return RecurringItem(
        id=item_id,
        name=item_id,
        type=tx_type,
        amount=Decimal(amount),
        interval=kwargs.pop("interval", RecurringInterval.MONTHLY),
        next_date=kwargs.pop("next_date", "2024-06-18"),
        **kwargs,
    )


def test_recurring_summary_counts_only_active_monthly_items() -> None:
    items = (
        _recurring("salary", TransactionType.INCOME, "5000"),
        _recurring("rent", TransactionType.EXPENSE, "1500"),
        _recurring("gym", TransactionType.EXPENSE, "40", interval=RecurringInterval.WEEKLY),
        _recurring("old", TransactionType.EXPENSE, "99", is_active=False),
    )

    summary = recurring_summary(items)

    assert (summary.total, summary.active) == (4, 3)
    assert summary.monthly_income == Decimal("5000")
    assert summary.monthly_expense == Decimal("1500")


def test_upcoming_recurring_within_a_week() -> None:
    items = (
        _recurring("later", TransactionType.EXPENSE, "1", next_date="2024-06-30"),
        _recurring("soon", TransactionType.EXPENSE, "1", next_date="2024-06-20"),
        _recurring("sooner", TransactionType.EXPENSE, "1", next_date="2024-06-16"),
        _recurring("paused", TransactionType.EXPENSE, "1", next_date="2024-06-16", is_active=False),
    )

    upcoming = upcoming_recurring(items, today=dt.date(2024, 6, 15))

    assert [item.id for item in upcoming] == ["sooner", "soon"]
