import asyncio

from financeflow.services.auth import AuthEvents, AuthSession
from financeflow.services.context import AppContext
from financeflow.services.gate import GateState


def test_workspace_follows_the_signed_in_user(gateway, settings) -> None:
    gateway.add_user("user-1")
    gateway.add_user("user-2", subscription="inactive")
    gateway.add("transactions", user_id="user-1", date="2024-06-01", type="income", amount="10")

    async def scenario() -> None:
        auth = AuthEvents(AuthSession(user_id="user-1"))
        context = AppContext(gateway, auth, settings, autopoll=False)

        assert await context.init() == GateState.GRANTED
        workspace = context.workspace
        assert workspace is not None and workspace.ready
        assert len(workspace.transactions.items) == 1

        await context.sign_out()
        assert context.workspace is None
        assert workspace.transactions.disposed

        await auth.sign_in(AuthSession(user_id="user-2"))
        assert context.gate.state is GateState.PAYMENT_REQUIRED
        assert context.workspace is None

        await context.dispose()

    asyncio.run(scenario())


def test_is_admin_checks_role_and_degrades_on_error(gateway, settings) -> None:
    gateway.add_user("user-1")
    gateway.roles.add(("user-1", "admin"))

    async def scenario() -> None:
        context = AppContext(gateway, AuthEvents(AuthSession(user_id="user-1")), settings, autopoll=False)
        assert await context.is_admin() is False

        await context.init()
        assert await context.is_admin() is True

        gateway.fail.add("has_role")
        assert await context.is_admin() is False
        await context.dispose()

    asyncio.run(scenario())
