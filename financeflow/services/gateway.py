from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

Row = dict[str, Any]


class GatewayError(Exception):
    """A read or write against the remote store failed."""


class RemoteGateway(Protocol):
    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]: ...

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row: ...

    async def update(self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]) -> list[Row]: ...

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> int: ...

    async def has_role(self, user_id: str, role: str) -> bool: ...
