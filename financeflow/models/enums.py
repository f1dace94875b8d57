from enum import Enum

from sqlalchemy import Enum as SAEnum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    BOTH = "both"


class PaymentMethod(str, Enum):
    CASH = "cash"
    BANK = "bank"
    E_WALLET = "e-wallet"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoStatus(str, Enum):
    ACTIVE = "active"
    DONE = "done"


class RecurringInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    BILL_REMINDER = "bill_reminder"
    TODO_OVERDUE = "todo_overdue"
    BUDGET_WARNING = "budget_warning"
    GOAL_MILESTONE = "goal_milestone"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def string_enum(enum_cls: type[Enum], length: int = 16) -> SAEnum:
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=length,
        values_callable=lambda cls: [item.value for item in cls],
    )
