from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from financeflow.models.enums import TransactionType
from financeflow.services.normalize import ZERO, coerce_enum, normalize_profile, to_amount, to_timestamp_string


@dataclass(frozen=True, slots=True)
class AdminStats:
    total_users: int
    active_users: int
    admin_count: int
    total_transactions: int
    total_income: Decimal
    total_expense: Decimal
    total_budgets: int
    total_goals: int


def admin_stats(
    profiles: Sequence[Mapping[str, Any]],
    transactions: Sequence[Mapping[str, Any]],
    budget_count: int,
    goal_count: int,
    admin_count: int,
) -> AdminStats:
    """Platform-wide counters over raw rows of every user.

    Works on raw mappings because only ``type``/``amount`` and ``is_active``
    are read; a profile counts as active unless ``is_active`` is exactly False.
    """
    income = ZERO
    expense = ZERO
    for row in transactions:
        amount = to_amount(row.get("amount"))
        if coerce_enum(TransactionType, row.get("type"), TransactionType.EXPENSE) == TransactionType.INCOME:
            income += amount
        else:
            expense += amount

    return AdminStats(
        total_users=len(profiles),
        active_users=sum(1 for profile in profiles if profile.get("is_active") is not False),
        admin_count=admin_count,
        total_transactions=len(transactions),
        total_income=income,
        total_expense=expense,
        total_budgets=budget_count,
        total_goals=goal_count,
    )


@dataclass(frozen=True, slots=True)
class AdminUser:
    id: str
    email: str
    name: str | None
    is_active: bool | None
    activated_at: str | None
    created_at: str | None
    is_admin: bool


def admin_users(profiles: Sequence[Mapping[str, Any]], admin_ids: Iterable[str]) -> list[AdminUser]:
    """Profiles in the given order, flagged with whether they hold the admin role."""
    admins = set(admin_ids)
    users = []
    for row in profiles:
        profile = normalize_profile(row)
        users.append(
            AdminUser(
                id=profile.id,
                email=profile.email,
                name=profile.name,
                is_active=profile.is_active,
                activated_at=profile.activated_at,
                created_at=to_timestamp_string(row.get("created_at")),
                is_admin=profile.id in admins,
            )
        )
    return users


def activation_updates(
    profile: Mapping[str, Any],
    is_active: bool,
    now: dt.datetime | None = None,
) -> dict[str, Any]:
    """Column updates for an admin switching a user on or off.

    Switching a user on also stamps ``activated_at`` the first time, which is
    what releases an account waiting for activation. Switching off keeps the
    stamp so a later reactivation does not count as a new activation.
    """
    updates: dict[str, Any] = {"is_active": is_active}
    if is_active and profile.get("activated_at") is None:
        updates["activated_at"] = now or dt.datetime.now(dt.timezone.utc)
    return updates
