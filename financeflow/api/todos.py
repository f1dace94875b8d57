from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.models.enums import TodoStatus
from financeflow.schemas.todo import TodoCreate, TodoRead
from financeflow.services.planner import TodoSort, quick_todos, sort_todos
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["todos"])
get_workspace = workspace_with("todos")


@router.get("/todos", response_model=list[TodoRead])
async def list_todos(
    sort: TodoSort = Query(default=TodoSort.PRIORITY),
    status_filter: TodoStatus | None = Query(default=None, alias="status"),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[TodoRead]:
    todos = sort_todos(workspace.todos.items, by=sort, status=status_filter)
    return [TodoRead.model_validate(todo) for todo in todos]


@router.get("/todos/quick", response_model=list[TodoRead])
async def list_quick_todos(
    limit: int = Query(default=5, ge=1, le=50),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[TodoRead]:
    return [TodoRead.model_validate(todo) for todo in quick_todos(workspace.todos.items, limit)]


@router.post("/todos", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
async def create_todo(payload: TodoCreate, workspace: UserWorkspace = Depends(get_workspace)) -> TodoRead:
    todo = await workspace.todos.add(payload)
    if todo is None:
        raise store_failure(workspace)
    return TodoRead.model_validate(todo)


@router.post("/todos/{todo_id}/toggle", response_model=TodoRead)
async def toggle_todo(todo_id: str, workspace: UserWorkspace = Depends(get_workspace)) -> TodoRead:
    if workspace.todos.get(todo_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    todo = await workspace.todos.toggle(todo_id)
    if todo is None:
        raise store_failure(workspace)
    return TodoRead.model_validate(todo)


@router.delete("/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(todo_id: str, workspace: UserWorkspace = Depends(get_workspace)) -> Response:
    if workspace.todos.get(todo_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    if not await workspace.todos.delete(todo_id):
        raise store_failure(workspace)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
