from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.schemas.budget import BudgetCreate, BudgetRead, BudgetUpdate
from financeflow.services.month import resolve_month
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["budgets"])
get_workspace = workspace_with("budgets")


@router.get("/budgets", response_model=list[BudgetRead])
async def list_budgets(
    month: str | None = Query(default=None, description="Month in YYYY-MM format"),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[BudgetRead]:
    budgets = workspace.budgets.items
    if month is not None:
        try:
            resolved = resolve_month(month)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        budgets = tuple(item for item in budgets if item.month == resolved)
    return [BudgetRead.model_validate(item) for item in budgets]


@router.post("/budgets", response_model=BudgetRead, status_code=status.HTTP_201_CREATED)
async def create_budget(
    payload: BudgetCreate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> BudgetRead:
    budget = await workspace.budgets.add(payload)
    if budget is None:
        raise store_failure(workspace)
    return BudgetRead.model_validate(budget)


@router.patch("/budgets/{budget_id}", response_model=BudgetRead)
async def update_budget(
    budget_id: str,
    payload: BudgetUpdate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> BudgetRead:
    if workspace.budgets.get(budget_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")

    budget = await workspace.budgets.update(budget_id, payload)
    if budget is None:
        raise store_failure(workspace)
    return BudgetRead.model_validate(budget)


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: str,
    workspace: UserWorkspace = Depends(get_workspace),
) -> Response:
    if workspace.budgets.get(budget_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    if not await workspace.budgets.delete(budget_id):
        raise store_failure(workspace)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
