from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from financeflow.db.base import Base
from financeflow.models import (
    Budget,
    Category,
    Goal,
    Notification,
    Profile,
    RecurringItem,
    Todo,
    Transaction,
    UserRole,
    UserSubscription,
)
from financeflow.services.gateway import GatewayError, Row

logger = logging.getLogger(__name__)

TABLES: dict[str, type[Base]] = {
    "profiles": Profile,
    "categories": Category,
    "transactions": Transaction,
    "budgets": Budget,
    "financial_goals": Goal,
    "todos": Todo,
    "recurring_transactions": RecurringItem,
    "notifications": Notification,
    "user_roles": UserRole,
    "user_subscriptions": UserSubscription,
}


def row_to_dict(obj: Base) -> Row:
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class SqlGateway:
    """Remote gateway backed by SQLAlchemy; every call runs in its own session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def _model(self, table: str) -> type[Base]:
        try:
            return TABLES[table]
        except KeyError as exc:
            raise GatewayError(f"Unknown table: {table}") from exc

    def _conditions(self, model: type[Base], filters: Mapping[str, Any] | None) -> list[Any]:
        conditions = []
        for column, value in (filters or {}).items():
            attr = getattr(model, column, None)
            if attr is None:
                raise GatewayError(f"Unknown column {model.__tablename__}.{column}")
            conditions.append(attr.is_(None) if value is None else attr == value)
        return conditions

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        model = self._model(table)
        query = select(model).where(*self._conditions(model, filters))
        if order_by is not None:
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            query = query.limit(limit)

        try:
            async with self._session_factory() as session:
                rows = await session.scalars(query)
                return [row_to_dict(item) for item in rows.all()]
        except SQLAlchemyError as exc:
            logger.error("select from %s failed: %s", table, exc)
            raise GatewayError(f"Failed to read {table}") from exc

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        model = self._model(table)
        try:
            async with self._session_factory() as session:
                obj = model(**values)
                session.add(obj)
                await session.commit()
                await session.refresh(obj)
                return row_to_dict(obj)
        except (SQLAlchemyError, TypeError) as exc:
            logger.error("insert into %s failed: %s", table, exc)
            raise GatewayError(f"Failed to write {table}") from exc

    async def update(self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]) -> list[Row]:
        model = self._model(table)
        statement = (
            update(model)
            .where(*self._conditions(model, filters))
            .values(**values)
            .returning(model)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._session_factory() as session:
                rows = await session.scalars(statement)
                updated = [row_to_dict(item) for item in rows.all()]
                await session.commit()
                return updated
        except SQLAlchemyError as exc:
            logger.error("update of %s failed: %s", table, exc)
            raise GatewayError(f"Failed to update {table}") from exc

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> int:
        model = self._model(table)
        statement = delete(model).where(*self._conditions(model, filters))
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                await session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as exc:
            logger.error("delete from %s failed: %s", table, exc)
            raise GatewayError(f"Failed to delete from {table}") from exc

    async def has_role(self, user_id: str, role: str) -> bool:
        query = select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role).limit(1)
        try:
            async with self._session_factory() as session:
                return await session.scalar(query) is not None
        except SQLAlchemyError as exc:
            logger.error("role check for %s failed: %s", user_id, exc)
            raise GatewayError("Failed to check role") from exc
