from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class AdminStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_users: int
    active_users: int
    admin_count: int
    total_transactions: int
    total_income: Decimal
    total_expense: Decimal
    total_budgets: int
    total_goals: int


class AdminUserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None
    is_active: bool | None
    activated_at: str | None
    created_at: str | None
    is_admin: bool


class AdminUserUpdate(BaseModel):
    is_active: bool
