from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class BudgetCreate(BaseModel):
    category_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    month: str = Field(pattern=MONTH_PATTERN)


class BudgetUpdate(BaseModel):
    amount: Decimal | None = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    month: str | None = Field(default=None, pattern=MONTH_PATTERN)


class BudgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str | None
    amount: Decimal
    month: str
