from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.schemas.recurring import RecurringCreate, RecurringRead
from financeflow.services.planner import upcoming_recurring
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["recurring"])
get_workspace = workspace_with("recurring")


@router.get("/recurring", response_model=list[RecurringRead])
async def list_recurring(
    upcoming_days: int | None = Query(default=None, ge=0, le=366),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[RecurringRead]:
    items = workspace.recurring.items
    if upcoming_days is not None:
        items = upcoming_recurring(items, days=upcoming_days)
    return [RecurringRead.model_validate(item) for item in items]


@router.post("/recurring", response_model=RecurringRead, status_code=status.HTTP_201_CREATED)
async def create_recurring(
    payload: RecurringCreate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> RecurringRead:
    item = await workspace.recurring.add(payload)
    if item is None:
        raise store_failure(workspace)
    return RecurringRead.model_validate(item)


@router.post("/recurring/{item_id}/toggle", response_model=RecurringRead)
async def toggle_recurring(item_id: str, workspace: UserWorkspace = Depends(get_workspace)) -> RecurringRead:
    if workspace.recurring.get(item_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring transaction not found")
    item = await workspace.recurring.toggle(item_id)
    if item is None:
        raise store_failure(workspace)
    return RecurringRead.model_validate(item)


@router.delete("/recurring/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recurring(item_id: str, workspace: UserWorkspace = Depends(get_workspace)) -> Response:
    if workspace.recurring.get(item_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring transaction not found")
    if not await workspace.recurring.delete(item_id):
        raise store_failure(workspace)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
