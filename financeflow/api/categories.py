from fastapi import APIRouter, Depends, Query, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.models.enums import CategoryType
from financeflow.schemas.category import CategoryCreate, CategoryRead
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["categories"])
get_workspace = workspace_with("categories")


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(
    type: CategoryType | None = Query(default=None),
    workspace: UserWorkspace = Depends(get_workspace),
) -> list[CategoryRead]:
    categories = workspace.categories.items
    if type is not None:
        categories = tuple(item for item in categories if item.type in (type, CategoryType.BOTH))
    return [CategoryRead.model_validate(item) for item in categories]


@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> CategoryRead:
    category = await workspace.categories.add(payload)
    if category is None:
        raise store_failure(workspace)
    return CategoryRead.model_validate(category)
