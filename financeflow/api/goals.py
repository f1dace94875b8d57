from fastapi import APIRouter, Depends, HTTPException, Response, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.schemas.goal import GoalCreate, GoalFunds, GoalRead, GoalUpdate
from financeflow.services.entities import Goal
from financeflow.services.planner import goal_progress
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["goals"])
get_workspace = workspace_with("goals")


def serialize_goal(goal: Goal) -> GoalRead:
    return GoalRead.model_validate(goal).model_copy(update={"progress": goal_progress(goal)})


def _existing_goal(workspace: UserWorkspace, goal_id: str) -> Goal:
    goal = workspace.goals.get(goal_id)
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return goal


@router.get("/goals", response_model=list[GoalRead])
async def list_goals(workspace: UserWorkspace = Depends(get_workspace)) -> list[GoalRead]:
    return [serialize_goal(goal) for goal in workspace.goals.items]


@router.post("/goals", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(payload: GoalCreate, workspace: UserWorkspace = Depends(get_workspace)) -> GoalRead:
    goal = await workspace.goals.add(payload)
    if goal is None:
        raise store_failure(workspace)
    return serialize_goal(goal)


@router.patch("/goals/{goal_id}", response_model=GoalRead)
async def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    workspace: UserWorkspace = Depends(get_workspace),
) -> GoalRead:
    _existing_goal(workspace, goal_id)
    goal = await workspace.goals.update(goal_id, payload)
    if goal is None:
        raise store_failure(workspace)
    return serialize_goal(goal)


@router.post("/goals/{goal_id}/funds", response_model=GoalRead)
async def add_goal_funds(
    goal_id: str,
    payload: GoalFunds,
    workspace: UserWorkspace = Depends(get_workspace),
) -> GoalRead:
    _existing_goal(workspace, goal_id)
    goal = await workspace.goals.add_funds(goal_id, payload.amount)
    if goal is None:
        raise store_failure(workspace)
    return serialize_goal(goal)


@router.delete("/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: str, workspace: UserWorkspace = Depends(get_workspace)) -> Response:
    _existing_goal(workspace, goal_id)
    if not await workspace.goals.delete(goal_id):
        raise store_failure(workspace)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
