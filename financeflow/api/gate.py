from fastapi import APIRouter, Depends

from financeflow.api.deps import evaluate_gate, get_gateway, get_optional_user_id
from financeflow.schemas.gate import GateStatusRead
from financeflow.services.gateway import RemoteGateway

router = APIRouter(prefix="/api", tags=["gate"])


@router.get("/gate", response_model=GateStatusRead)
async def gate_status(
    user_id: str | None = Depends(get_optional_user_id),
    gateway: RemoteGateway = Depends(get_gateway),
) -> GateStatusRead:
    state, redirect = await evaluate_gate(gateway, user_id)
    return GateStatusRead(state=state, redirect=redirect)
