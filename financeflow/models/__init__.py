from financeflow.models.access import UserRole, UserSubscription
from financeflow.models.budget import Budget
from financeflow.models.category import Category
from financeflow.models.enums import (
    CategoryType,
    NotificationType,
    PaymentMethod,
    Priority,
    RecurringInterval,
    SubscriptionStatus,
    TodoStatus,
    TransactionType,
)
from financeflow.models.goal import Goal
from financeflow.models.notification import Notification
from financeflow.models.profile import Profile
from financeflow.models.recurring import RecurringItem
from financeflow.models.todo import Todo
from financeflow.models.transaction import Transaction

__all__ = [
    "Budget",
    "Category",
    "CategoryType",
    "Goal",
    "Notification",
    "NotificationType",
    "PaymentMethod",
    "Priority",
    "Profile",
    "RecurringInterval",
    "RecurringItem",
    "SubscriptionStatus",
    "Todo",
    "TodoStatus",
    "Transaction",
    "TransactionType",
    "UserRole",
    "UserSubscription",
]
