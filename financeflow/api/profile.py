from fastapi import APIRouter, Depends, HTTPException, status

from financeflow.api.deps import store_failure, workspace_with
from financeflow.schemas.profile import ProfileRead, ProfileUpdate
from financeflow.services.workspace import UserWorkspace

router = APIRouter(prefix="/api", tags=["profile"])
get_workspace = workspace_with("profile")


@router.get("/profile", response_model=ProfileRead)
async def read_profile(workspace: UserWorkspace = Depends(get_workspace)) -> ProfileRead:
    profile = workspace.profile.profile
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return ProfileRead.model_validate(profile)


@router.patch("/profile", response_model=ProfileRead)
async def update_profile(payload: ProfileUpdate, workspace: UserWorkspace = Depends(get_workspace)) -> ProfileRead:
    profile = await workspace.profile.update(payload)
    if profile is None:
        raise store_failure(workspace)
    return ProfileRead.model_validate(profile)
