"""Access gate: decides whether a session may enter the application.

The gate only reads ``profiles`` and ``user_subscriptions``. While the user
waits for activation or payment a single polling task re-evaluates the
state every ``poll_interval`` seconds; the task exists only while the gate
is in one of :data:`POLLING_STATES`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from financeflow.models.enums import SubscriptionStatus
from financeflow.services.auth import AuthProvider, AuthSession
from financeflow.services.gateway import GatewayError, RemoteGateway

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    ACTIVATION_PENDING = "activation_pending"
    SUBSCRIPTION_CHECKING = "subscription_checking"
    PAYMENT_REQUIRED = "payment_required"
    GRANTED = "granted"
    DENIED = "denied"


POLLING_STATES = frozenset(
    {GateState.ACTIVATION_PENDING, GateState.SUBSCRIPTION_CHECKING, GateState.PAYMENT_REQUIRED}
)

REDIRECTS: dict[GateState, str | None] = {
    GateState.UNAUTHENTICATED: "/auth",
    GateState.AUTHENTICATING: None,
    GateState.ACTIVATION_PENDING: "/pending-activation",
    GateState.SUBSCRIPTION_CHECKING: None,
    GateState.PAYMENT_REQUIRED: "/payment",
    GateState.GRANTED: None,
    GateState.DENIED: "/account-disabled",
}

GateListener = Callable[[GateState], Awaitable[None]]


class Activation(str, Enum):
    ACTIVATED = "activated"
    PENDING = "pending"
    DEACTIVATED = "deactivated"


class AccessGate:
    def __init__(
        self,
        gateway: RemoteGateway,
        auth: AuthProvider,
        *,
        poll_interval: float = 5.0,
        autopoll: bool = True,
    ) -> None:
        self._gateway = gateway
        self._auth = auth
        self.poll_interval = poll_interval
        self.autopoll = autopoll
        self.state = GateState.UNAUTHENTICATED
        self.session: AuthSession | None = None
        self._generation = 0
        self._poll_task: asyncio.Task[None] | None = None
        self._listeners: list[GateListener] = []
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def decision(self) -> tuple[GateState, str | None]:
        return self.state, REDIRECTS[self.state]

    @property
    def polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def on_change(self, listener: GateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> GateState:
        await self._transition(GateState.AUTHENTICATING)
        session = await self._auth.restore_session()
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.on_auth_state_change(self._on_auth_change)
        await self._enter_session(session)
        return self.state

    async def _on_auth_change(self, session: AuthSession | None) -> None:
        if session is None:
            await self._reset()
            return
        if self.session is not None and self.session.user_id == session.user_id:
            # Token refresh for the same user; keep the current evaluation.
            self.session = session
            return
        await self._enter_session(session)

    async def _enter_session(self, session: AuthSession | None) -> None:
        self._generation += 1
        self.session = session
        if session is None:
            await self._transition(GateState.UNAUTHENTICATED)
            return
        await self._evaluate(self._generation)

    async def tick(self) -> GateState:
        """Re-evaluate once; a no-op outside the polling states."""
        if self.state in POLLING_STATES:
            await self._evaluate(self._generation)
        return self.state

    async def return_from_payment(self) -> GateState:
        if self.state in {GateState.PAYMENT_REQUIRED, GateState.SUBSCRIPTION_CHECKING}:
            await self._check_subscription(self._generation)
        return self.state

    async def sign_out(self) -> None:
        await self._auth.sign_out()
        await self._reset()

    async def dispose(self) -> None:
        self._stop_polling()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    async def _reset(self) -> None:
        self._generation += 1
        self.session = None
        await self._transition(GateState.UNAUTHENTICATED)

    async def _evaluate(self, generation: int) -> None:
        if self.session is None:
            return

        activation = await self._check_activation(self.session.user_id)
        if generation != self._generation:
            logger.debug("Discarding activation result for an ended session")
            return

        if activation is Activation.DEACTIVATED:
            await self._transition(GateState.DENIED)
        elif activation is Activation.PENDING:
            await self._transition(GateState.ACTIVATION_PENDING)
        else:
            await self._check_subscription(generation)

    async def _check_activation(self, user_id: str) -> Activation:
        try:
            rows = await self._gateway.select("profiles", filters={"id": user_id}, limit=1)
        except GatewayError as exc:
            logger.error("Activation check for %s failed: %s", user_id, exc)
            return Activation.PENDING

        if not rows:
            return Activation.PENDING
        profile = rows[0]
        if profile.get("is_active") is False:
            return Activation.DEACTIVATED
        if profile.get("activated_at"):
            return Activation.ACTIVATED
        return Activation.PENDING

    async def _check_subscription(self, generation: int) -> None:
        if self.session is None:
            return

        await self._transition(GateState.SUBSCRIPTION_CHECKING)
        active = await self._subscription_active(self.session.user_id)
        if generation != self._generation:
            logger.debug("Discarding subscription result for an ended session")
            return
        await self._transition(GateState.GRANTED if active else GateState.PAYMENT_REQUIRED)

    async def _subscription_active(self, user_id: str) -> bool:
        try:
            rows = await self._gateway.select("user_subscriptions", filters={"user_id": user_id}, limit=1)
        except GatewayError as exc:
            logger.error("Subscription check for %s failed: %s", user_id, exc)
            return False

        if not rows:
            return False
        status = rows[0].get("status")
        return status == SubscriptionStatus.ACTIVE or status == SubscriptionStatus.ACTIVE.value

    async def _transition(self, state: GateState) -> None:
        previous = self.state
        self.state = state
        if state not in POLLING_STATES:
            self._stop_polling()
        elif self.autopoll and not self.polling:
            self._start_polling()

        if previous is state:
            return
        logger.info("Access gate %s -> %s", previous.value, state.value)
        for listener in list(self._listeners):
            await listener(state)

    def _start_polling(self) -> None:
        logger.debug("Starting access polling every %.1fs", self.poll_interval)
        self._poll_task = asyncio.create_task(self._poll())

    def _stop_polling(self) -> None:
        task = self._poll_task
        self._poll_task = None
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            return
        logger.debug("Stopping access polling")
        task.cancel()

    async def _poll(self) -> None:
        while self.state in POLLING_STATES:
            await asyncio.sleep(self.poll_interval)
            if self._poll_task is not asyncio.current_task():
                return
            await self._evaluate(self._generation)
