import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from financeflow.models.enums import PaymentMethod, TransactionType


class TransactionCreate(BaseModel):
    date: dt.date = Field(default_factory=dt.date.today)
    type: TransactionType
    category_id: str | None = None
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    note: str | None = Field(default=None, max_length=500)
    payment_method: PaymentMethod = PaymentMethod.CASH
    tags: list[str] | None = None

    @field_validator("note")
    @classmethod
    def strip_note(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class TransactionUpdate(BaseModel):
    date: dt.date | None = None
    type: TransactionType | None = None
    category_id: str | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    note: str | None = Field(default=None, max_length=500)
    payment_method: PaymentMethod | None = None


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: str
    type: TransactionType
    category_id: str | None
    amount: Decimal
    payment_method: PaymentMethod
    note: str
    tags: list[str]
    recurring_id: str | None
    created_at: str | None
