from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthSession:
    user_id: str
    email: str | None = None


AuthListener = Callable[[AuthSession | None], Awaitable[None]]


class AuthProvider(Protocol):
    async def restore_session(self) -> AuthSession | None: ...

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]: ...

    async def sign_out(self) -> None: ...


class AuthEvents:
    """In-process session holder that publishes login, logout and refresh events."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self._session = session
        self._listeners: list[AuthListener] = []

    @property
    def session(self) -> AuthSession | None:
        return self._session

    async def restore_session(self) -> AuthSession | None:
        return self._session

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _publish(self) -> None:
        for listener in list(self._listeners):
            await listener(self._session)

    async def sign_in(self, session: AuthSession) -> None:
        logger.info("Session started for user %s", session.user_id)
        self._session = session
        await self._publish()

    async def refresh(self) -> None:
        if self._session is not None:
            await self._publish()

    async def sign_out(self) -> None:
        if self._session is not None:
            logger.info("Session ended for user %s", self._session.user_id)
        self._session = None
        await self._publish()


class StaticAuth:
    """Provider pinned to one identity, used to evaluate the gate per request."""

    def __init__(self, session: AuthSession | None) -> None:
        self._session = session

    async def restore_session(self) -> AuthSession | None:
        return self._session

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        return lambda: None

    async def sign_out(self) -> None:
        self._session = None
