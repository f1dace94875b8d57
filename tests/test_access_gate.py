import asyncio

from financeflow.services.auth import AuthEvents, AuthSession, StaticAuth
from financeflow.services.gate import AccessGate, GateState


def _gate(gateway, user_id: str | None = "user-1", **kwargs) -> AccessGate:
    session = AuthSession(user_id=user_id) if user_id else None
    kwargs.setdefault("autopoll", False)
    return AccessGate(gateway, StaticAuth(session), **kwargs)


def test_no_session_is_unauthenticated(gateway) -> None:
    async def scenario() -> None:
        gate = _gate(gateway, user_id=None)
        assert await gate.start() == GateState.UNAUTHENTICATED
        assert gate.decision == (GateState.UNAUTHENTICATED, "/auth")

    asyncio.run(scenario())


def test_unactivated_user_never_reaches_granted(gateway) -> None:
    gateway.add_user("user-1", activated=False, subscription="active")

    async def scenario() -> None:
        gate = _gate(gateway)
        assert await gate.start() == GateState.ACTIVATION_PENDING
        for _ in range(3):
            assert await gate.tick() == GateState.ACTIVATION_PENDING
        assert gate.decision == (GateState.ACTIVATION_PENDING, "/pending-activation")
        assert ("select", "user_subscriptions") not in gateway.calls

    asyncio.run(scenario())


def test_deactivated_user_is_denied(gateway) -> None:
    gateway.add_user("user-1", activated=True, is_active=False)

    async def scenario() -> None:
        gate = _gate(gateway)
        assert await gate.start() == GateState.DENIED
        assert await gate.tick() == GateState.DENIED
        assert gate.decision == (GateState.DENIED, "/account-disabled")

    asyncio.run(scenario())


def test_activation_error_counts_as_not_activated(gateway) -> None:
    gateway.add_user("user-1")
    gateway.fail.add("select:profiles")

    async def scenario() -> None:
        gate = _gate(gateway)
        assert await gate.start() == GateState.ACTIVATION_PENDING

    asyncio.run(scenario())


def test_activation_moves_through_subscription_check(gateway) -> None:
    gateway.add_user("user-1", activated=False, subscription="active")
    seen: list[GateState] = []

    async def record(state: GateState) -> None:
        seen.append(state)

    async def scenario() -> None:
        gate = _gate(gateway)
        gate.on_change(record)
        await gate.start()
        gateway.tables["profiles"][0]["activated_at"] = "2024-06-02T00:00:00+00:00"
        await gate.tick()

    asyncio.run(scenario())

    assert seen == [
        GateState.AUTHENTICATING,
        GateState.ACTIVATION_PENDING,
        GateState.SUBSCRIPTION_CHECKING,
        GateState.GRANTED,
    ]


def test_payment_required_until_subscription_is_active(gateway) -> None:
    gateway.add_user("user-1", subscription="inactive")

    async def scenario() -> None:
        gate = _gate(gateway)
        assert await gate.start() == GateState.PAYMENT_REQUIRED
        assert gate.decision == (GateState.PAYMENT_REQUIRED, "/payment")

        gateway.set_subscription("user-1", "active")
        assert await gate.tick() == GateState.GRANTED
        assert gate.decision == (GateState.GRANTED, None)

    asyncio.run(scenario())


def test_missing_or_failing_subscription_requires_payment(gateway) -> None:
    gateway.add_user("user-1", subscription=None)
    gateway.add_user("user-2", subscription="active")
    gateway.fail.add("select:user_subscriptions")

    async def scenario() -> None:
        assert await _gate(gateway, "user-1").start() == GateState.PAYMENT_REQUIRED
        assert await _gate(gateway, "user-2").start() == GateState.PAYMENT_REQUIRED

    asyncio.run(scenario())


def test_return_from_payment_rechecks_subscription(gateway) -> None:
    gateway.add_user("user-1", subscription="inactive")

    async def scenario() -> None:
        gate = _gate(gateway)
        await gate.start()
        gateway.set_subscription("user-1", "active")
        assert await gate.return_from_payment() == GateState.GRANTED

    asyncio.run(scenario())


def test_polling_grants_access_and_stops(gateway) -> None:
    gateway.add_user("user-1", subscription="inactive")

    async def scenario() -> None:
        gate = _gate(gateway, autopoll=True, poll_interval=0.01)
        assert await gate.start() == GateState.PAYMENT_REQUIRED
        assert gate.polling

        gateway.set_subscription("user-1", "active")
        for _ in range(100):
            if gate.state is GateState.GRANTED:
                break
            await asyncio.sleep(0.01)

        assert gate.state is GateState.GRANTED
        await asyncio.sleep(0)
        assert not gate.polling

        checks = len(gateway.calls)
        await asyncio.sleep(0.05)
        assert len(gateway.calls) == checks
        await gate.dispose()

    asyncio.run(scenario())


def test_sign_out_resets_state_and_stops_polling(gateway) -> None:
    gateway.add_user("user-1", activated=False)

    async def scenario() -> None:
        auth = AuthEvents(AuthSession(user_id="user-1"))
        gate = AccessGate(gateway, auth, poll_interval=0.01)
        assert await gate.start() == GateState.ACTIVATION_PENDING
        assert gate.polling

        await auth.sign_out()
        assert gate.state is GateState.UNAUTHENTICATED
        assert gate.session is None
        await asyncio.sleep(0)
        assert not gate.polling

        await auth.sign_in(AuthSession(user_id="user-1"))
        assert gate.state is GateState.ACTIVATION_PENDING
        assert gate.polling
        await gate.dispose()

    asyncio.run(scenario())


def test_gate_never_writes(gateway) -> None:
    gateway.add_user("user-1", subscription="inactive")

    async def scenario() -> None:
        gate = _gate(gateway)
        await gate.start()
        await gate.tick()
        await gate.return_from_payment()

    asyncio.run(scenario())

    assert {operation for operation, _ in gateway.calls} == {"select"}
