from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from financeflow.api.deps import workspace_with
from financeflow.services.exports import csv_filename, export_snapshot, snapshot_filename, transactions_csv
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api/export", tags=["export"])
transactions_workspace = workspace_with("transactions", "categories")
snapshot_workspace = workspace_with("transactions", "budgets", "todos", "categories", "profile")


@router.get("/transactions.csv")
async def export_transactions_csv(workspace: UserWorkspace = Depends(transactions_workspace)) -> Response:
    content = transactions_csv(workspace.transactions.items, workspace.categories.items)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename()}"'},
    )


@router.get("/snapshot")
async def export_json_snapshot(workspace: UserWorkspace = Depends(snapshot_workspace)) -> JSONResponse:
    snapshot = export_snapshot(
        transactions=workspace.transactions.items,
        budgets=workspace.budgets.items,
        todos=workspace.todos.items,
        categories=workspace.categories.items,
        currency=workspace.profile.currency,
        initial_balance=workspace.initial_balance,
    )
    return JSONResponse(
        content=snapshot,
        headers={"Content-Disposition": f'attachment; filename="{snapshot_filename()}"'},
    )
