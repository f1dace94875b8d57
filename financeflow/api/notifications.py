from fastapi import APIRouter, Depends, HTTPException, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.schemas.notification import NotificationList, NotificationRead
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["notifications"])
get_workspace = workspace_with("notifications")


def _notification_list(workspace: UserWorkspace) -> NotificationList:
    store = workspace.notifications
    return NotificationList(
        unread_count=store.unread_count,
        items=[NotificationRead.model_validate(item) for item in store.items],
    )


@router.get("/notifications", response_model=NotificationList)
async def list_notifications(workspace: UserWorkspace = Depends(get_workspace)) -> NotificationList:
    return _notification_list(workspace)


@router.post("/notifications/read-all", response_model=NotificationList)
async def mark_all_notifications_read(workspace: UserWorkspace = Depends(get_workspace)) -> NotificationList:
    if not await workspace.notifications.mark_all_as_read():
        raise store_failure(workspace)
    return _notification_list(workspace)


@router.post("/notifications/{notification_id}/read", response_model=NotificationList)
async def mark_notification_read(
    notification_id: str,
    workspace: UserWorkspace = Depends(get_workspace),
) -> NotificationList:
    if workspace.notifications.get(notification_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    if not await workspace.notifications.mark_as_read(notification_id):
        raise store_failure(workspace)
    return _notification_list(workspace)
