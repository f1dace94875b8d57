from pydantic import BaseModel, ConfigDict

from financeflow.models.enums import NotificationType


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    reference_id: str | None
    created_at: str | None


class NotificationList(BaseModel):
    unread_count: int
    items: list[NotificationRead]
