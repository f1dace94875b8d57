from collections.abc import AsyncIterator, Callable
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from financeflow.db.gateway import SqlGateway
from financeflow.db.session import AsyncSessionLocal
from financeflow.db.settings import Settings, get_settings
from financeflow.services.auth import AuthSession, StaticAuth
from financeflow.services.context import ADMIN_ROLE
from financeflow.services.gate import AccessGate, GateState
from financeflow.services.gateway import GatewayError, RemoteGateway
from financeflow.services.notifier import Notifier
from financeflow.services.workspace import UserWorkspace

GATE_STATUS_CODES: dict[GateState, int] = {
    GateState.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    GateState.ACTIVATION_PENDING: status.HTTP_403_FORBIDDEN,
    GateState.DENIED: status.HTTP_403_FORBIDDEN,
    GateState.PAYMENT_REQUIRED: status.HTTP_402_PAYMENT_REQUIRED,
}


@lru_cache
def get_gateway() -> RemoteGateway:
    return SqlGateway(AsyncSessionLocal)


async def get_optional_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


async def get_current_user_id(user_id: str | None = Depends(get_optional_user_id)) -> str:
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id


async def evaluate_gate(gateway: RemoteGateway, user_id: str | None) -> tuple[GateState, str | None]:
    session = AuthSession(user_id=user_id) if user_id else None
    gate = AccessGate(gateway, StaticAuth(session), autopoll=False)
    try:
        await gate.start()
        return gate.decision
    finally:
        await gate.dispose()


async def require_access(
    user_id: str = Depends(get_current_user_id),
    gateway: RemoteGateway = Depends(get_gateway),
) -> str:
    state, redirect = await evaluate_gate(gateway, user_id)
    if state is GateState.GRANTED:
        return user_id
    raise HTTPException(
        status_code=GATE_STATUS_CODES.get(state, status.HTTP_403_FORBIDDEN),
        detail={"state": state.value, "redirect": redirect},
    )


async def require_admin(
    user_id: str = Depends(get_current_user_id),
    gateway: RemoteGateway = Depends(get_gateway),
) -> str:
    try:
        is_admin = await gateway.has_role(user_id, ADMIN_ROLE)
    except GatewayError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    if not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not permitted")
    return user_id


def workspace_with(*names: str) -> Callable[..., AsyncIterator[UserWorkspace]]:
    """Dependency yielding a workspace with only the named stores fetched.

    With no names every store is fetched, which the report routes need.
    """

    async def dependency(
        user_id: str = Depends(require_access),
        gateway: RemoteGateway = Depends(get_gateway),
        settings: Settings = Depends(get_settings),
    ) -> AsyncIterator[UserWorkspace]:
        workspace = UserWorkspace(gateway, user_id, Notifier(), settings)
        await workspace.load(*names)
        if workspace.errors:
            workspace.dispose()
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=workspace.errors[0])
        try:
            yield workspace
        finally:
            workspace.dispose()

    return dependency


get_workspace = workspace_with()


def store_failure(workspace: UserWorkspace) -> HTTPException:
    """HTTP error for a store operation that returned None/False."""
    notice = workspace.notifier.last_error()
    if notice is None:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    detail = notice.description or notice.title
    if detail.endswith("not found"):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
