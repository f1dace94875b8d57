import datetime as dt
import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from financeflow.models.budget import Budget
from financeflow.models.category import Category
from financeflow.models.access import UserSubscription
from financeflow.models.enums import CategoryType, PaymentMethod, SubscriptionStatus, TransactionType
from financeflow.models.profile import Profile
from financeflow.models.transaction import Transaction
from financeflow.services.month import current_month

logger = logging.getLogger(__name__)

# (name, icon, color)
DEFAULT_INCOME_CATEGORIES: Sequence[tuple[str, str, str]] = (
    ("Salary", "💰", "emerald"),
    ("Freelance", "💻", "blue"),
    ("Investment", "📈", "purple"),
    ("Gift", "🎁", "pink"),
    ("Other Income", "💵", "cyan"),
)

DEFAULT_EXPENSE_CATEGORIES: Sequence[tuple[str, str, str]] = (
    ("Food & Dining", "🍔", "orange"),
    ("Transportation", "🚗", "blue"),
    ("Shopping", "🛍️", "pink"),
    ("Bills & Utilities", "📄", "yellow"),
    ("Entertainment", "🎮", "purple"),
    ("Health", "🏥", "red"),
    ("Education", "📚", "indigo"),
    ("Other Expense", "💸", "gray"),
)

# (category name, type, amount, note, payment method)
DEMO_TRANSACTIONS: Sequence[tuple[str, TransactionType, Decimal, str, PaymentMethod]] = (
    ("Salary", TransactionType.INCOME, Decimal("15000000"), "Monthly salary", PaymentMethod.BANK),
    ("Food & Dining", TransactionType.EXPENSE, Decimal("150000"), "Lunch with team", PaymentMethod.CASH),
    ("Transportation", TransactionType.EXPENSE, Decimal("500000"), "Fuel", PaymentMethod.E_WALLET),
    ("Bills & Utilities", TransactionType.EXPENSE, Decimal("1200000"), "Electricity bill", PaymentMethod.BANK),
    ("Freelance", TransactionType.INCOME, Decimal("3500000"), "Website project", PaymentMethod.BANK),
)

DEMO_BUDGETS: Sequence[tuple[str, Decimal]] = (
    ("Food & Dining", Decimal("2500000")),
    ("Transportation", Decimal("1000000")),
    ("Bills & Utilities", Decimal("1500000")),
)


async def ensure_default_categories(
    session: AsyncSession, user_id: str
) -> dict[tuple[str, CategoryType], Category]:
    rows = await session.scalars(select(Category).where(Category.user_id == user_id))
    existing = {(category.name, category.type): category for category in rows}

    for kind, defaults in (
        (CategoryType.INCOME, DEFAULT_INCOME_CATEGORIES),
        (CategoryType.EXPENSE, DEFAULT_EXPENSE_CATEGORIES),
    ):
        for name, icon, color in defaults:
            key = (name, kind)
            if key not in existing:
                category = Category(user_id=user_id, name=name, icon=icon, color=color, type=kind, is_default=True)
                session.add(category)
                existing[key] = category

    await session.flush()
    return existing


async def _seed_demo_data(session: AsyncSession, user_id: str) -> None:
    profile = await session.get(Profile, user_id)
    if profile is None:
        profile = Profile(
            id=user_id,
            email="demo@financeflow.local",
            name="Demo",
            activated_at=dt.datetime.now(dt.timezone.utc),
        )
        session.add(profile)
        session.add(UserSubscription(user_id=user_id, status=SubscriptionStatus.ACTIVE))
        await session.flush()
    elif await session.scalar(select(Transaction.id).where(Transaction.user_id == user_id).limit(1)):
        return

    categories = await ensure_default_categories(session, user_id)
    by_name = {name: category for (name, _), category in categories.items()}
    month = current_month()

    for name, tx_type, amount, note, payment_method in DEMO_TRANSACTIONS:
        session.add(
            Transaction(
                user_id=user_id,
                type=tx_type,
                category_id=by_name[name].id,
                amount=amount,
                note=note,
                payment_method=payment_method,
            )
        )

    for name, amount in DEMO_BUDGETS:
        session.add(Budget(user_id=user_id, category_id=by_name[name].id, amount=amount, month=month))

    logger.info("Seeded demo data for user %s", user_id)


async def seed_initial_data(session: AsyncSession, seed_demo: bool = False, demo_user_id: str | None = None) -> None:
    if seed_demo and demo_user_id:
        await _seed_demo_data(session, demo_user_id)
    await session.commit()
