from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.models.enums import TransactionType
from financeflow.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate
from financeflow.services.month import resolve_month
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["transactions"])
get_workspace = workspace_with("transactions")


@router.get("/transactions", response_model=list[TransactionRead])
async def list_transactions(
    month: str | None = Query(default=None, description="Month in YYYY-MM format"),
    type: TransactionType | None = Query(default=None),
    category_id: str | None = Query(default=None),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[TransactionRead]:
    transactions = workspace.transactions.items
    if month is not None:
        try:
            resolved = resolve_month(month)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        transactions = tuple(item for item in transactions if item.date.startswith(resolved))
    if type is not None:
        transactions = tuple(item for item in transactions if item.type == type)
    if category_id is not None:
        transactions = tuple(item for item in transactions if item.category_id == category_id)
    return [TransactionRead.model_validate(item) for item in transactions]


@router.post("/transactions", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> TransactionRead:
    transaction = await workspace.transactions.add(payload)
    if transaction is None:
        raise store_failure(workspace)
    return TransactionRead.model_validate(transaction)


@router.patch("/transactions/{transaction_id}", response_model=TransactionRead)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> TransactionRead:
    if workspace.transactions.get(transaction_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")

    transaction = await workspace.transactions.update(transaction_id, payload)
    if transaction is None:
        raise store_failure(workspace)
    return TransactionRead.model_validate(transaction)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    workspace: UserWorkspace = Depends(get_workspace),
) -> Response:
    if workspace.transactions.get(transaction_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    if not await workspace.transactions.delete(transaction_id):
        raise store_failure(workspace)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
