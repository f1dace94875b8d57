from fastapi import APIRouter, Depends, HTTPException, Query

from financeflow.api.deps import get_workspace
from financeflow.schemas.report import (
    BudgetActualRead,
    BudgetOverviewResponse,
    CategoryBreakdownItem,
    DashboardSummaryRead,
    GoalStatsRead,
    MonthlyReportResponse,
    PlannerReport,
    RecurringSummaryRead,
    TodoStatsRead,
    TrendPointRead,
)
from financeflow.services.month import resolve_month
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _month_or_422(month: str | None) -> str:
    try:
        return resolve_month(month)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/monthly", response_model=MonthlyReportResponse)
async def monthly_report(
    month: str | None = Query(default=None, description="Month in YYYY-MM format"),
    workspace: UserWorkspace = Depends(get_workspace),
) -> MonthlyReportResponse:
    resolved = _month_or_422(month)
    insights = workspace.insights(resolved)
    top = insights.top_spending_category

    return MonthlyReportResponse(
        month=resolved,
        currency=workspace.profile.currency,
        total_income=insights.totals.income,
        total_expense=insights.totals.expense,
        net_flow=insights.net_flow,
        savings_rate=insights.savings_rate,
        breakdown_by_category=[
            CategoryBreakdownItem.model_validate(item) for item in workspace.breakdown(resolved)
        ],
        budget_vs_actual=[BudgetActualRead.model_validate(row) for row in workspace.budget_rows(resolved)],
        over_budget=[BudgetActualRead.model_validate(row) for row in insights.over_budget_categories],
        top_spending_category=CategoryBreakdownItem.model_validate(top) if top else None,
        summary=DashboardSummaryRead.model_validate(workspace.dashboard(resolved)),
    )


@router.get("/trend", response_model=list[TrendPointRead])
async def monthly_trend(workspace: UserWorkspace = Depends(get_workspace)) -> list[TrendPointRead]:
    return [TrendPointRead.model_validate(point) for point in workspace.trend()]


@router.get("/budgets", response_model=BudgetOverviewResponse)
async def budget_overview(
    month: str | None = Query(default=None, description="Month in YYYY-MM format"),
    workspace: UserWorkspace = Depends(get_workspace),
) -> BudgetOverviewResponse:
    resolved = _month_or_422(month)
    overview = workspace.overview(resolved)
    return BudgetOverviewResponse(
        month=resolved,
        total_budget=overview.total_budget,
        total_spent=overview.total_spent,
        used_percent=overview.used_percent,
        on_track=overview.on_track,
        over_budget=overview.over_budget,
        items=[BudgetActualRead.model_validate(row) for row in workspace.budget_rows(resolved)],
    )


@router.get("/planner", response_model=PlannerReport)
async def planner_report(workspace: UserWorkspace = Depends(get_workspace)) -> PlannerReport:
    return PlannerReport(
        goals=GoalStatsRead.model_validate(workspace.goal_stats()),
        todos=TodoStatsRead.model_validate(workspace.todo_stats()),
        recurring=RecurringSummaryRead.model_validate(workspace.recurring_summary()),
    )
