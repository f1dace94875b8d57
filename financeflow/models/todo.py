import datetime as dt
from uuid import uuid4

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from financeflow.db.base import Base
from financeflow.models.enums import Priority, TodoStatus, string_enum


class Todo(Base):
    __tablename__ = "todos"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    priority: Mapped[Priority] = mapped_column(
        string_enum(Priority), nullable=False, default=Priority.MEDIUM, server_default=Priority.MEDIUM.value
    )
    status: Mapped[TodoStatus] = mapped_column(
        string_enum(TodoStatus), nullable=False, default=TodoStatus.ACTIVE, server_default=TodoStatus.ACTIVE.value
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
