from financeflow.schemas.admin import AdminStatsRead, AdminUserRead, AdminUserUpdate
from financeflow.schemas.budget import BudgetCreate, BudgetRead, BudgetUpdate
from financeflow.schemas.category import CategoryCreate, CategoryRead
from financeflow.schemas.gate import GateStatusRead
from financeflow.schemas.goal import GoalCreate, GoalFunds, GoalRead, GoalUpdate
from financeflow.schemas.notification import NotificationList, NotificationRead
from financeflow.schemas.profile import ProfileRead, ProfileUpdate
from financeflow.schemas.recurring import RecurringCreate, RecurringRead
from financeflow.schemas.report import (
    BudgetActualRead,
    BudgetOverviewResponse,
    CategoryBreakdownItem,
    DashboardSummaryRead,
    MonthlyReportResponse,
    PlannerReport,
    TrendPointRead,
)
from financeflow.schemas.todo import TodoCreate, TodoRead
from financeflow.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate

__all__ = [
    "AdminStatsRead",
    "AdminUserRead",
    "AdminUserUpdate",
    "BudgetCreate",
    "BudgetRead",
    "BudgetUpdate",
    "CategoryCreate",
    "CategoryRead",
    "GateStatusRead",
    "GoalCreate",
    "GoalFunds",
    "GoalRead",
    "GoalUpdate",
    "NotificationList",
    "NotificationRead",
    "ProfileRead",
    "ProfileUpdate",
    "RecurringCreate",
    "RecurringRead",
    "BudgetActualRead",
    "BudgetOverviewResponse",
    "CategoryBreakdownItem",
    "DashboardSummaryRead",
    "MonthlyReportResponse",
    "PlannerReport",
    "TrendPointRead",
    "TodoCreate",
    "TodoRead",
    "TransactionCreate",
    "TransactionRead",
    "TransactionUpdate",
]
