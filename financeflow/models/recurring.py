import datetime as dt
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from financeflow.db.base import Base
from financeflow.models.enums import PaymentMethod, RecurringInterval, TransactionType, string_enum


class RecurringItem(Base):
    __tablename__ = "recurring_transactions"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[TransactionType] = mapped_column(string_enum(TransactionType), nullable=False)
    category_id: Mapped[str | None] = mapped_column(Uuid(as_uuid=False), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        string_enum(PaymentMethod),
        nullable=False,
        default=PaymentMethod.CASH,
        server_default=PaymentMethod.CASH.value,
    )
    interval: Mapped[RecurringInterval] = mapped_column(
        string_enum(RecurringInterval),
        nullable=False,
        default=RecurringInterval.MONTHLY,
        server_default=RecurringInterval.MONTHLY.value,
    )
    next_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
