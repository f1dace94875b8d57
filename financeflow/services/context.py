from __future__ import annotations

import logging

from financeflow.db.settings import Settings, get_settings
from financeflow.services.auth import AuthProvider
from financeflow.services.gate import AccessGate, GateState
from financeflow.services.gateway import GatewayError, RemoteGateway
from financeflow.services.notifier import Notifier
from financeflow.services.workspace import UserWorkspace

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


class AppContext:
    """Wires the access gate to the workspace of whoever is signed in.

    A workspace exists only while the gate is ``granted`` for a session; it
    is disposed on sign-out so late results of the old user are dropped.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        auth: AuthProvider,
        settings: Settings | None = None,
        *,
        autopoll: bool = True,
    ) -> None:
        self.settings = settings or get_settings()
        self.gateway = gateway
        self.auth = auth
        self.notifier = Notifier()
        self.gate = AccessGate(
            gateway,
            auth,
            poll_interval=self.settings.subscription_poll_interval,
            autopoll=autopoll,
        )
        self.workspace: UserWorkspace | None = None
        self._unsubscribe = self.gate.on_change(self._on_gate_change)

    async def init(self) -> GateState:
        return await self.gate.start()

    async def _on_gate_change(self, state: GateState) -> None:
        if state is GateState.GRANTED:
            await self._open_workspace()
        elif state is GateState.UNAUTHENTICATED:
            self._close_workspace()

    async def _open_workspace(self) -> None:
        session = self.gate.session
        if session is None:
            return
        if self.workspace is not None and self.workspace.user_id == session.user_id:
            return

        self._close_workspace()
        workspace = UserWorkspace(self.gateway, session.user_id, self.notifier, self.settings)
        self.workspace = workspace
        await workspace.load()

    def _close_workspace(self) -> None:
        if self.workspace is not None:
            self.workspace.dispose()
            self.workspace = None

    async def is_admin(self) -> bool:
        session = self.gate.session
        if session is None:
            return False
        try:
            return await self.gateway.has_role(session.user_id, ADMIN_ROLE)
        except GatewayError as exc:
            logger.error("Admin role check failed: %s", exc)
            return False

    async def sign_out(self) -> None:
        await self.gate.sign_out()

    async def dispose(self) -> None:
        self._unsubscribe()
        await self.gate.dispose()
        self._close_workspace()
