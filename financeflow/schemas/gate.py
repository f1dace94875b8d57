from pydantic import BaseModel

from financeflow.services.gate import GateState


class GateStatusRead(BaseModel):
    state: GateState
    redirect: str | None
