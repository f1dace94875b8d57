import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from financeflow.models.enums import PaymentMethod, RecurringInterval, TransactionType


class RecurringCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: TransactionType
    category_id: str | None = None
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    payment_method: PaymentMethod = PaymentMethod.CASH
    interval: RecurringInterval = RecurringInterval.MONTHLY
    next_date: dt.date = Field(default_factory=dt.date.today)
    note: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Name cannot be empty")
        return normalized


class RecurringRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: TransactionType
    category_id: str | None
    amount: Decimal
    payment_method: PaymentMethod
    interval: RecurringInterval
    next_date: str | None
    note: str
    is_active: bool
