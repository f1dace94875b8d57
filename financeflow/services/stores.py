"""Per-entity caches of one user's rows.

A store owns its ``items`` tuple exclusively. Mutations go to the gateway
first and the cache is patched only with the row the gateway hands back, so
a failed write leaves the previous state untouched. Failures are reported on
the shared :class:`Notifier` and never raised to the caller.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from financeflow.models.enums import TodoStatus
from financeflow.schemas.budget import BudgetCreate, BudgetUpdate
from financeflow.schemas.category import CategoryCreate
from financeflow.schemas.goal import GoalCreate, GoalUpdate
from financeflow.schemas.profile import ProfileUpdate
from financeflow.schemas.recurring import RecurringCreate
from financeflow.schemas.todo import TodoCreate
from financeflow.schemas.transaction import TransactionCreate, TransactionUpdate
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
from financeflow.services.gateway import GatewayError, RemoteGateway, Row
from financeflow.services.normalize import (
    normalize_budget,
    normalize_category,
    normalize_goal,
    normalize_notification,
    normalize_profile,
    normalize_recurring,
    normalize_rows,
    normalize_todo,
    normalize_transaction,
)
from financeflow.services.notifier import Notifier
from financeflow.services.planner import apply_goal_funds, apply_goal_update

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", Transaction, Category, Budget, Goal, Todo, RecurringItem, Notification, Profile)


class ResourceStore(Generic[EntityT]):
    table: ClassVar[str]
    label: ClassVar[str]
    owner_column: ClassVar[str] = "user_id"
    order_by: ClassVar[str | None] = None
    descending: ClassVar[bool] = False

    def __init__(
        self,
        gateway: RemoteGateway,
        user_id: str,
        notifier: Notifier,
        limit: int | None = None,
    ) -> None:
        self._gateway = gateway
        self.user_id = user_id
        self.notifier = notifier
        self.limit = limit
        self.items: tuple[EntityT, ...] = ()
        self.loading = True
        self.error: str | None = None
        self._disposed = False

    def _normalize(self, row: Row) -> EntityT:
        raise NotImplementedError

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True

    def get(self, row_id: str) -> EntityT | None:
        return next((item for item in self.items if item.id == row_id), None)

    def _scope(self, **extra: Any) -> dict[str, Any]:
        return {self.owner_column: self.user_id, **extra}

    async def fetch(self) -> tuple[EntityT, ...]:
        try:
            rows = await self._gateway.select(
                self.table,
                filters=self._scope(),
                order_by=self.order_by,
                descending=self.descending,
                limit=self.limit,
            )
        except GatewayError as exc:
            if self._disposed:
                return self.items
            logger.error("Error fetching %s: %s", self.table, exc)
            self.error = str(exc)
            self.loading = False
            self.notifier.error(f"Error loading {self.label}s", str(exc))
            return self.items

        if self._disposed:
            logger.debug("Discarding %s rows that arrived after dispose", self.table)
            return self.items

        self.items = normalize_rows(rows, self._normalize)
        self.error = None
        self.loading = False
        return self.items

    def _replace(self, entities: tuple[EntityT, ...]) -> None:
        if self._disposed or not entities:
            return
        by_id = {entity.id: entity for entity in entities}
        self.items = tuple(by_id.get(item.id, item) for item in self.items)

    async def _insert(self, values: Mapping[str, Any], *, prepend: bool) -> EntityT | None:
        try:
            row = await self._gateway.insert(self.table, {**values, self.owner_column: self.user_id})
        except GatewayError as exc:
            self.notifier.error(f"Error adding {self.label}", str(exc))
            return None

        entity = self._normalize(row)
        if not self._disposed:
            self.items = (entity, *self.items) if prepend else (*self.items, entity)
        return entity

    async def _update(self, values: Mapping[str, Any], **filters: Any) -> tuple[EntityT, ...] | None:
        try:
            rows = await self._gateway.update(self.table, values, filters=self._scope(**filters))
        except GatewayError as exc:
            self.notifier.error(f"Error updating {self.label}", str(exc))
            return None

        entities = normalize_rows(rows, self._normalize)
        self._replace(entities)
        return entities

    async def _update_one(self, row_id: str, values: Mapping[str, Any]) -> EntityT | None:
        entities = await self._update(values, id=row_id)
        if entities is None:
            return None
        if not entities:
            self.notifier.error(f"Error updating {self.label}", f"{self.label.capitalize()} not found")
            return None
        return entities[0]

    async def _delete(self, row_id: str) -> bool:
        try:
            await self._gateway.delete(self.table, filters=self._scope(id=row_id))
        except GatewayError as exc:
            self.notifier.error(f"Error deleting {self.label}", str(exc))
            return False

        if not self._disposed:
            self.items = tuple(item for item in self.items if item.id != row_id)
        return True


class TransactionStore(ResourceStore[Transaction]):
    table = "transactions"
    label = "transaction"
    order_by = "date"
    descending = True

    def _normalize(self, row: Row) -> Transaction:
        return normalize_transaction(row)

    async def add(self, payload: TransactionCreate) -> Transaction | None:
        return await self._insert(payload.model_dump(), prepend=True)

    async def update(self, transaction_id: str, payload: TransactionUpdate) -> Transaction | None:
        values = payload.model_dump(exclude_unset=True)
        if not values:
            return self.get(transaction_id)
        updated = await self._update_one(transaction_id, values)
        if updated is not None:
            self.notifier.success("Transaction updated")
        return updated

    async def delete(self, transaction_id: str) -> bool:
        return await self._delete(transaction_id)


class CategoryStore(ResourceStore[Category]):
    table = "categories"
    label = "category"
    order_by = "name"

    def _normalize(self, row: Row) -> Category:
        return normalize_category(row)

    async def add(self, payload: CategoryCreate) -> Category | None:
        return await self._insert({**payload.model_dump(), "is_default": False}, prepend=False)


class BudgetStore(ResourceStore[Budget]):
    table = "budgets"
    label = "budget"

    def _normalize(self, row: Row) -> Budget:
        return normalize_budget(row)

    async def add(self, payload: BudgetCreate) -> Budget | None:
        return await self._insert(payload.model_dump(), prepend=False)

    async def update(self, budget_id: str, payload: BudgetUpdate) -> Budget | None:
        values = payload.model_dump(exclude_unset=True)
        if not values:
            return self.get(budget_id)
        updated = await self._update_one(budget_id, values)
        if updated is not None:
            self.notifier.success("Budget updated")
        return updated

    async def delete(self, budget_id: str) -> bool:
        return await self._delete(budget_id)


class TodoStore(ResourceStore[Todo]):
    table = "todos"
    label = "todo"
    order_by = "created_at"
    descending = True

    def _normalize(self, row: Row) -> Todo:
        return normalize_todo(row)

    async def add(self, payload: TodoCreate) -> Todo | None:
        return await self._insert({**payload.model_dump(), "status": TodoStatus.ACTIVE}, prepend=True)

    async def toggle(self, todo_id: str, now: dt.datetime | None = None) -> Todo | None:
        todo = self.get(todo_id)
        if todo is None:
            return None

        if todo.status == TodoStatus.ACTIVE:
            values = {"status": TodoStatus.DONE, "completed_at": now or dt.datetime.now(dt.timezone.utc)}
        else:
            values = {"status": TodoStatus.ACTIVE, "completed_at": None}
        return await self._update_one(todo_id, values)

    async def delete(self, todo_id: str) -> bool:
        return await self._delete(todo_id)


class GoalStore(ResourceStore[Goal]):
    table = "financial_goals"
    label = "goal"
    order_by = "created_at"
    descending = True

    def _normalize(self, row: Row) -> Goal:
        return normalize_goal(row)

    async def add(self, payload: GoalCreate) -> Goal | None:
        return await self._insert({**payload.model_dump(), "current_amount": 0}, prepend=True)

    async def update(self, goal_id: str, payload: GoalUpdate, now: dt.datetime | None = None) -> Goal | None:
        values = payload.model_dump(exclude_unset=True)
        goal = self.get(goal_id)
        if not values:
            return goal
        if goal is not None:
            values = apply_goal_update(goal, values, now)
        updated = await self._update_one(goal_id, values)
        if updated is not None and "completed_at" in values:
            self._goal_achieved(updated)
        return updated

    async def add_funds(self, goal_id: str, amount: Any, now: dt.datetime | None = None) -> Goal | None:
        goal = self.get(goal_id)
        if goal is None:
            return None

        updates = apply_goal_funds(goal, amount, now)
        updated = await self._update_one(goal_id, updates)
        if updated is not None and "completed_at" in updates:
            self._goal_achieved(updated)
        return updated

    def _goal_achieved(self, goal: Goal) -> None:
        self.notifier.success("🎉 Goal achieved!", f"Congratulations! You've reached your {goal.name} goal!")

    async def delete(self, goal_id: str) -> bool:
        return await self._delete(goal_id)


class RecurringStore(ResourceStore[RecurringItem]):
    table = "recurring_transactions"
    label = "recurring transaction"
    order_by = "next_date"

    def _normalize(self, row: Row) -> RecurringItem:
        return normalize_recurring(row)

    async def add(self, payload: RecurringCreate) -> RecurringItem | None:
        return await self._insert({**payload.model_dump(), "is_active": True}, prepend=False)

    async def toggle(self, item_id: str) -> RecurringItem | None:
        item = self.get(item_id)
        if item is None:
            return None
        return await self._update_one(item_id, {"is_active": not item.is_active})

    async def delete(self, item_id: str) -> bool:
        return await self._delete(item_id)


class NotificationStore(ResourceStore[Notification]):
    table = "notifications"
    label = "notification"
    order_by = "created_at"
    descending = True

    def _normalize(self, row: Row) -> Notification:
        return normalize_notification(row)

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.items if not item.is_read)

    async def mark_as_read(self, notification_id: str) -> bool:
        return await self._update_one(notification_id, {"is_read": True}) is not None

    async def mark_all_as_read(self) -> bool:
        return await self._update({"is_read": True}, is_read=False) is not None


class ProfileStore(ResourceStore[Profile]):
    table = "profiles"
    label = "profile"
    owner_column = "id"

    def __init__(
        self,
        gateway: RemoteGateway,
        user_id: str,
        notifier: Notifier,
        default_currency: str = "IDR",
    ) -> None:
        super().__init__(gateway, user_id, notifier, limit=1)
        self.default_currency = default_currency

    def _normalize(self, row: Row) -> Profile:
        return normalize_profile(row, self.default_currency)

    @property
    def profile(self) -> Profile | None:
        return self.items[0] if self.items else None

    @property
    def currency(self) -> str:
        return self.profile.currency if self.profile else self.default_currency

    async def update(self, payload: ProfileUpdate) -> Profile | None:
        values = payload.model_dump(exclude_none=True)
        if not values:
            return self.profile
        updated = await self._update_one(self.user_id, values)
        if updated is not None:
            self.notifier.success("Settings saved", "Your preferences have been updated.")
        return updated
