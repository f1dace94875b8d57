import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from financeflow.models.enums import Priority, TodoStatus


class TodoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    due_date: dt.date | None = None
    priority: Priority = Priority.MEDIUM

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Title cannot be empty")
        return normalized


class TodoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    due_date: str | None
    priority: Priority
    status: TodoStatus
    created_at: str | None
    completed_at: str | None
