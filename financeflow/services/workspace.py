from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

from financeflow.db.settings import Settings, get_settings
from financeflow.services import planner, reporting
from financeflow.services.gateway import RemoteGateway
from financeflow.services.normalize import ZERO
from financeflow.services.notifier import Notifier
from financeflow.services.stores import (
    BudgetStore,
    CategoryStore,
    GoalStore,
    NotificationStore,
    ProfileStore,
    RecurringStore,
    ResourceStore,
    TodoStore,
    TransactionStore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_NAMES = (
    "transactions",
    "categories",
    "budgets",
    "todos",
    "goals",
    "recurring",
    "notifications",
    "profile",
)


class UserWorkspace:
    """All stores of one signed-in user plus cached derived reports.

    Report accessors are memoized on the identity of the store tuples they
    read, so repeated calls between two store changes reuse the last result.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        user_id: str,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.user_id = user_id
        self.notifier = notifier or Notifier()
        self.trend_months = settings.trend_months

        self.transactions = TransactionStore(gateway, user_id, self.notifier)
        self.categories = CategoryStore(gateway, user_id, self.notifier)
        self.budgets = BudgetStore(gateway, user_id, self.notifier)
        self.todos = TodoStore(gateway, user_id, self.notifier)
        self.goals = GoalStore(gateway, user_id, self.notifier)
        self.recurring = RecurringStore(gateway, user_id, self.notifier)
        self.notifications = NotificationStore(
            gateway, user_id, self.notifier, limit=settings.notifications_limit
        )
        self.profile = ProfileStore(
            gateway, user_id, self.notifier, default_currency=settings.default_currency
        )
        self._memo: dict[str, tuple[tuple[Any, ...], tuple[Any, ...], Any]] = {}

    @property
    def stores(self) -> tuple[ResourceStore[Any], ...]:
        return tuple(getattr(self, name) for name in STORE_NAMES)

    @property
    def ready(self) -> bool:
        return all(not store.loading for store in self.stores)

    @property
    def errors(self) -> list[str]:
        return [store.error for store in self.stores if store.error]

    async def load(self, *names: str) -> None:
        """Fetch the named stores concurrently, or every store when none are named."""
        stores = [self.store(name) for name in names] if names else list(self.stores)
        await asyncio.gather(*(store.fetch() for store in stores))
        logger.debug("Workspace for %s loaded %d stores with %d errors", self.user_id, len(stores), len(self.errors))

    def store(self, name: str) -> ResourceStore[Any]:
        if name not in STORE_NAMES:
            raise KeyError(f"Unknown store: {name}")
        return getattr(self, name)

    def dispose(self) -> None:
        for store in self.stores:
            store.dispose()
        self._memo.clear()

    def _cached(self, name: str, inputs: tuple[Any, ...], args: tuple[Any, ...], compute: Callable[[], T]) -> T:
        hit = self._memo.get(name)
        if hit is not None:
            cached_inputs, cached_args, value = hit
            if cached_args == args and all(a is b for a, b in zip(cached_inputs, inputs)):
                return value
        value = compute()
        self._memo[name] = (inputs, args, value)
        return value

    @property
    def initial_balance(self) -> Decimal:
        profile = self.profile.profile
        return profile.initial_balance if profile else ZERO

    def totals(self, month: str) -> reporting.MonthlyTotals:
        txs = self.transactions.items
        return self._cached("totals", (txs,), (month,), lambda: reporting.monthly_totals(txs, month))

    def breakdown(self, month: str) -> list[reporting.CategoryBreakdownItem]:
        txs, cats = self.transactions.items, self.categories.items
        return self._cached(
            "breakdown", (txs, cats), (month,), lambda: reporting.category_breakdown(txs, cats, month)
        )

    def budget_rows(self, month: str) -> list[reporting.BudgetActual]:
        budgets, txs, cats = self.budgets.items, self.transactions.items, self.categories.items
        return self._cached(
            "budget_rows",
            (budgets, txs, cats),
            (month,),
            lambda: reporting.budget_vs_actual(budgets, txs, cats, month),
        )

    def insights(self, month: str) -> reporting.AnalyticsInsights:
        txs, budgets, cats = self.transactions.items, self.budgets.items, self.categories.items
        return self._cached(
            "insights",
            (txs, budgets, cats),
            (month,),
            lambda: reporting.analytics_insights(txs, budgets, cats, month),
        )

    def dashboard(self, month: str) -> reporting.DashboardSummary:
        txs, budgets, profiles = self.transactions.items, self.budgets.items, self.profile.items
        return self._cached(
            "dashboard",
            (txs, budgets, profiles),
            (month,),
            lambda: reporting.dashboard_summary(txs, budgets, month, self.initial_balance),
        )

    def overview(self, month: str) -> reporting.BudgetOverview:
        return reporting.budget_overview(self.budget_rows(month))

    def trend(self) -> list[reporting.TrendPoint]:
        txs = self.transactions.items
        return self._cached(
            "trend", (txs,), (self.trend_months,), lambda: reporting.monthly_trend(txs, self.trend_months)
        )

    def goal_stats(self) -> planner.GoalStats:
        goals = self.goals.items
        return self._cached("goal_stats", (goals,), (), lambda: planner.goal_stats(goals))

    def todo_stats(self) -> planner.TodoStats:
        # Overdue depends on today's date, so this is not memoized.
        return planner.todo_stats(self.todos.items)

    def recurring_summary(self) -> planner.RecurringSummary:
        items = self.recurring.items
        return self._cached("recurring", (items,), (), lambda: planner.recurring_summary(items))
