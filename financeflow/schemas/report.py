from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from financeflow.services.reporting import BudgetStatus


class CategoryBreakdownItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: str | None
    name: str
    amount: Decimal


class BudgetActualRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: str | None
    name: str
    budget_amount: Decimal
    actual_amount: Decimal
    remaining: Decimal
    percent_used: Decimal
    status: BudgetStatus


class DashboardSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_balance: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    total_budget: Decimal
    budget_remaining: Decimal
    budget_used_percent: Decimal


class MonthlyReportResponse(BaseModel):
    month: str
    currency: str
    total_income: Decimal
    total_expense: Decimal
    net_flow: Decimal
    savings_rate: Decimal
    breakdown_by_category: list[CategoryBreakdownItem]
    budget_vs_actual: list[BudgetActualRead]
    over_budget: list[BudgetActualRead]
    top_spending_category: CategoryBreakdownItem | None
    summary: DashboardSummaryRead


class TrendPointRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    income: Decimal
    expense: Decimal
    savings: Decimal


class BudgetOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    total_budget: Decimal
    total_spent: Decimal
    used_percent: Decimal
    on_track: int
    over_budget: int
    items: list[BudgetActualRead]


class GoalStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    active: int
    completed: int
    total_saved: Decimal
    total_target: Decimal


class TodoStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    active: int
    completed: int
    overdue: int


class RecurringSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    active: int
    monthly_income: Decimal
    monthly_expense: Decimal


class PlannerReport(BaseModel):
    goals: GoalStatsRead
    todos: TodoStatsRead
    recurring: RecurringSummaryRead
