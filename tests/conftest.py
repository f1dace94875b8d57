import datetime as dt
from collections import defaultdict
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

import pytest

from financeflow.db.settings import Settings
from financeflow.services.gateway import GatewayError, Row


class InMemoryGateway:
    """Dict-backed stand-in for the remote store.

    Add ``"select"``, ``"insert:todos"``, ``"has_role"`` and similar keys to
    ``fail`` to make matching calls raise :class:`GatewayError`.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[Row]] = defaultdict(list)
        self.roles: set[tuple[str, str]] = set()
        self.fail: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        if {operation, table, f"{operation}:{table}"} & self.fail:
            raise GatewayError(f"{operation} on {table} failed")

    @staticmethod
    def _matches(row: Row, filters: Mapping[str, Any] | None) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def add(self, table: str, **values: Any) -> Row:
        row = {"id": str(uuid4()), "created_at": dt.datetime.now(dt.timezone.utc), **values}
        self.tables[table].append(row)
        return row

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        self._check("select", table)
        rows = [dict(row) for row in self.tables[table] if self._matches(row, filters)]
        if order_by is not None:
            rows.sort(key=lambda row: str(row.get(order_by) or ""), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        self._check("insert", table)
        return dict(self.add(table, **values))

    async def update(self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]) -> list[Row]:
        self._check("update", table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> int:
        self._check("delete", table)
        kept = [row for row in self.tables[table] if not self._matches(row, filters)]
        removed = len(self.tables[table]) - len(kept)
        self.tables[table] = kept
        return removed

    async def has_role(self, user_id: str, role: str) -> bool:
        self._check("has_role", "user_roles")
        if (user_id, role) in self.roles:
            return True
        return any(row["user_id"] == user_id and row["role"] == role for row in self.tables["user_roles"])

    def add_user(
        self,
        user_id: str,
        *,
        activated: bool = True,
        is_active: bool | None = True,
        subscription: str | None = "active",
    ) -> None:
        self.tables["profiles"].append(
            {
                "id": user_id,
                "email": f"{user_id}@example.com",
                "name": None,
                "currency": "IDR",
                "initial_balance": 0,
                "is_active": is_active,
                "activated_at": dt.datetime(2024, 6, 1, tzinfo=dt.timezone.utc) if activated else None,
            }
        )
        if subscription is not None:
            self.add("user_subscriptions", user_id=user_id, status=subscription)

    def set_subscription(self, user_id: str, status: str) -> None:
        for row in self.tables["user_subscriptions"]:
            if row["user_id"] == user_id:
                row["status"] = status


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, subscription_poll_interval=0.01)
