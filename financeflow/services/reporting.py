"""Derived figures for the dashboard, budget and analytics views.

Every function here is pure: inputs are iterated, never mutated, and any
amount is passed through :func:`to_amount` again so rows built outside the
normalization boundary aggregate the same way as normalized ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from financeflow.models.enums import TransactionType
from financeflow.services.entities import Budget, Category, Transaction
from financeflow.services.normalize import ZERO, to_amount

OTHER_CATEGORY = "Other"
UNKNOWN_CATEGORY = "Unknown"
HUNDRED = Decimal("100")
WARNING_PERCENT = Decimal("80")


class BudgetStatus(str, Enum):
    ON_TRACK = "on_track"
    WARNING = "warning"
    OVER = "over"


@dataclass(frozen=True, slots=True)
class MonthlyTotals:
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True, slots=True)
class CategoryBreakdownItem:
    category_id: str | None
    name: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class BudgetActual:
    category_id: str | None
    name: str
    budget_amount: Decimal
    actual_amount: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.budget_amount - self.actual_amount

    @property
    def percent_used(self) -> Decimal:
        if self.budget_amount <= 0:
            return ZERO
        return self.actual_amount / self.budget_amount * HUNDRED

    @property
    def status(self) -> BudgetStatus:
        percent = self.percent_used
        if percent > HUNDRED:
            return BudgetStatus.OVER
        if percent >= WARNING_PERCENT:
            return BudgetStatus.WARNING
        return BudgetStatus.ON_TRACK


@dataclass(frozen=True, slots=True)
class TrendPoint:
    month: str
    income: Decimal
    expense: Decimal

    @property
    def savings(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    total_balance: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    total_budget: Decimal
    budget_remaining: Decimal
    budget_used_percent: Decimal


@dataclass(frozen=True, slots=True)
class BudgetOverview:
    total_budget: Decimal
    total_spent: Decimal
    used_percent: Decimal
    on_track: int
    over_budget: int


@dataclass(frozen=True, slots=True)
class AnalyticsInsights:
    totals: MonthlyTotals
    savings_rate: Decimal
    top_spending_category: CategoryBreakdownItem | None
    over_budget_categories: list[BudgetActual]

    @property
    def net_flow(self) -> Decimal:
        return self.totals.net


def _category_names(categories: Iterable[Category]) -> dict[str, str]:
    names: dict[str, str] = {}
    for category in categories:
        names.setdefault(category.id, category.name)
    return names


def _expense_by_category(transactions: Iterable[Transaction], month: str) -> dict[str | None, Decimal]:
    totals: dict[str | None, Decimal] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        if not (transaction.date or "").startswith(month):
            continue
        key = transaction.category_id
        totals[key] = totals.get(key, ZERO) + to_amount(transaction.amount)
    return totals


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= 0:
        return ZERO
    return part / whole * HUNDRED


def monthly_totals(transactions: Iterable[Transaction], month: str) -> MonthlyTotals:
    """Income and expense of transactions whose date starts with ``month``.

    An empty ``month`` matches every transaction, which yields all-time totals.
    """
    income = ZERO
    expense = ZERO
    for transaction in transactions:
        if not (transaction.date or "").startswith(month):
            continue
        amount = to_amount(transaction.amount)
        if transaction.type == TransactionType.INCOME:
            income += amount
        elif transaction.type == TransactionType.EXPENSE:
            expense += amount
    return MonthlyTotals(income=income, expense=expense)


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: str,
) -> list[CategoryBreakdownItem]:
    """Expense per category for ``month``, largest first.

    Uncategorized spending and spending on deleted categories share a single
    ``"Other"`` item with ``category_id=None``.
    """
    names = _category_names(categories)
    totals: dict[str | None, Decimal] = {}
    for category_id, amount in _expense_by_category(transactions, month).items():
        key = category_id if category_id in names else None
        totals[key] = totals.get(key, ZERO) + amount
    items = [
        CategoryBreakdownItem(
            category_id=category_id,
            name=names[category_id] if category_id is not None else OTHER_CATEGORY,
            amount=amount,
        )
        for category_id, amount in totals.items()
    ]
    # sorted() is stable with reverse=True, so equal amounts keep encounter order.
    return sorted(items, key=lambda item: item.amount, reverse=True)


def budget_vs_actual(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    month: str,
) -> list[BudgetActual]:
    budgeted: dict[str | None, Decimal] = {}
    for budget in budgets:
        if (budget.month or "")[:7] != month:
            continue
        budgeted[budget.category_id] = budgeted.get(budget.category_id, ZERO) + to_amount(budget.amount)

    spent = _expense_by_category(transactions, month)
    names = _category_names(categories)

    return [
        BudgetActual(
            category_id=category_id,
            name=names.get(category_id, UNKNOWN_CATEGORY) if category_id else UNKNOWN_CATEGORY,
            budget_amount=amount,
            actual_amount=spent.get(category_id, ZERO),
        )
        for category_id, amount in budgeted.items()
    ]


def savings_rate(income: Decimal | int | str | None, expense: Decimal | int | str | None) -> Decimal:
    income_value = to_amount(income)
    if income_value <= 0:
        return ZERO
    return (income_value - to_amount(expense)) / income_value * HUNDRED


def top_spending_category(breakdown: Sequence[CategoryBreakdownItem]) -> CategoryBreakdownItem | None:
    # max() keeps the first of equal maxima, matching the head of the stable descending sort.
    return max(breakdown, key=lambda item: to_amount(item.amount), default=None)


def over_budget_categories(rows: Iterable[BudgetActual]) -> list[BudgetActual]:
    return [row for row in rows if to_amount(row.actual_amount) > to_amount(row.budget_amount)]


def monthly_trend(transactions: Iterable[Transaction], months: int = 6) -> list[TrendPoint]:
    if months <= 0:
        return []

    buckets: dict[str, tuple[Decimal, Decimal]] = {}
    for transaction in transactions:
        key = (transaction.date or "")[:7]
        if not key:
            continue
        income, expense = buckets.get(key, (ZERO, ZERO))
        amount = to_amount(transaction.amount)
        if transaction.type == TransactionType.INCOME:
            income += amount
        elif transaction.type == TransactionType.EXPENSE:
            expense += amount
        buckets[key] = (income, expense)

    return [
        TrendPoint(month=key, income=buckets[key][0], expense=buckets[key][1])
        for key in sorted(buckets)[-months:]
    ]


def dashboard_summary(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    month: str,
    initial_balance: Decimal | int | str | None = ZERO,
) -> DashboardSummary:
    monthly = monthly_totals(transactions, month)
    overall = monthly_totals(transactions, "")
    rows = budget_vs_actual(budgets, transactions, (), month)

    total_budget = sum((row.budget_amount for row in rows), ZERO)
    total_spent = sum((row.actual_amount for row in rows), ZERO)

    return DashboardSummary(
        total_balance=to_amount(initial_balance) + overall.net,
        monthly_income=monthly.income,
        monthly_expense=monthly.expense,
        total_budget=total_budget,
        budget_remaining=total_budget - total_spent,
        budget_used_percent=_percent(total_spent, total_budget),
    )


def budget_overview(rows: Sequence[BudgetActual]) -> BudgetOverview:
    total_budget = sum((row.budget_amount for row in rows), ZERO)
    total_spent = sum((row.actual_amount for row in rows), ZERO)
    over = over_budget_categories(rows)
    return BudgetOverview(
        total_budget=total_budget,
        total_spent=total_spent,
        used_percent=_percent(total_spent, total_budget),
        on_track=len(rows) - len(over),
        over_budget=len(over),
    )


def analytics_insights(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    categories: Sequence[Category],
    month: str,
) -> AnalyticsInsights:
    totals = monthly_totals(transactions, month)
    breakdown = category_breakdown(transactions, categories, month)
    rows = budget_vs_actual(budgets, transactions, categories, month)
    return AnalyticsInsights(
        totals=totals,
        savings_rate=savings_rate(totals.income, totals.expense),
        top_spending_category=top_spending_category(breakdown),
        over_budget_categories=over_budget_categories(rows),
    )
