from pydantic import BaseModel, ConfigDict, Field, field_validator

from financeflow.models.enums import CategoryType


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    icon: str = Field(default="💸", max_length=16)
    color: str = Field(default="gray", max_length=32)
    type: CategoryType = CategoryType.EXPENSE

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Category name cannot be empty")
        return normalized


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str
    color: str
    type: CategoryType
    is_default: bool
