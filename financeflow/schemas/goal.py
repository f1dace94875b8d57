import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GoalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    target_amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    deadline: dt.date | None = None
    icon: str = Field(default="🎯", max_length=16)
    color: str = Field(default="#06b6d4", max_length=16)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Goal name cannot be empty")
        return normalized


class GoalUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    target_amount: Decimal | None = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    deadline: dt.date | None = None
    icon: str | None = Field(default=None, max_length=16)
    color: str | None = Field(default=None, max_length=16)


class GoalFunds(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: str | None
    icon: str
    color: str
    completed_at: str | None
    progress: Decimal = Decimal("0")
