import datetime as dt
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import ARRAY, Date, DateTime, ForeignKey, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from financeflow.db.base import Base
from financeflow.models.enums import PaymentMethod, TransactionType, string_enum


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, default=dt.date.today, server_default=func.current_date())
    type: Mapped[TransactionType] = mapped_column(string_enum(TransactionType), nullable=False)
    # Deleting a category leaves the reference dangling on purpose; readers degrade it to "Other".
    category_id: Mapped[str | None] = mapped_column(Uuid(as_uuid=False), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        string_enum(PaymentMethod),
        nullable=False,
        default=PaymentMethod.CASH,
        server_default=PaymentMethod.CASH.value,
    )
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String(32)), nullable=True)
    recurring_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("recurring_transactions.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
