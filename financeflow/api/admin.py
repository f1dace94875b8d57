import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from financeflow.api.deps import get_gateway, require_admin
from financeflow.schemas.admin import AdminStatsRead, AdminUserRead, AdminUserUpdate
from financeflow.schemas.transaction import TransactionRead
from financeflow.services.admin import activation_updates, admin_stats, admin_users
from financeflow.services.context import ADMIN_ROLE
from financeflow.services.gateway import GatewayError, RemoteGateway
from financeflow.services.normalize import normalize_rows, normalize_transaction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

USER_TRANSACTIONS_LIMIT = 50


def _bad_gateway(exc: GatewayError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


async def _load_user(gateway: RemoteGateway, user_id: str) -> AdminUserRead:
    profiles = await gateway.select("profiles", filters={"id": user_id}, limit=1)
    if not profiles:
        raise _user_not_found()
    admins = await gateway.select("user_roles", filters={"user_id": user_id, "role": ADMIN_ROLE})
    users = admin_users(profiles, [row["user_id"] for row in admins])
    return AdminUserRead.model_validate(users[0])


@router.get("/stats", response_model=AdminStatsRead)
async def platform_stats(
    _: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> AdminStatsRead:
    try:
        profiles = await gateway.select("profiles")
        transactions = await gateway.select("transactions")
        budgets = await gateway.select("budgets")
        goals = await gateway.select("financial_goals")
        admins = await gateway.select("user_roles", filters={"role": ADMIN_ROLE})
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    stats = admin_stats(profiles, transactions, len(budgets), len(goals), len(admins))
    return AdminStatsRead.model_validate(stats)


@router.get("/users", response_model=list[AdminUserRead])
async def list_users(
    _: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> list[AdminUserRead]:
    try:
        profiles = await gateway.select("profiles", order_by="created_at", descending=True)
        admins = await gateway.select("user_roles", filters={"role": ADMIN_ROLE})
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    users = admin_users(profiles, [row["user_id"] for row in admins])
    return [AdminUserRead.model_validate(user) for user in users]


@router.patch("/users/{user_id}", response_model=AdminUserRead)
async def set_user_active(
    user_id: str,
    payload: AdminUserUpdate,
    admin_id: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> AdminUserRead:
    try:
        profiles = await gateway.select("profiles", filters={"id": user_id}, limit=1)
        if not profiles:
            raise _user_not_found()
        await gateway.update("profiles", activation_updates(profiles[0], payload.is_active), filters={"id": user_id})
        user = await _load_user(gateway, user_id)
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    logger.info("Admin %s set user %s active=%s", admin_id, user_id, payload.is_active)
    return user


@router.put("/users/{user_id}/admin", response_model=AdminUserRead)
async def grant_admin(
    user_id: str,
    admin_id: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> AdminUserRead:
    try:
        user = await _load_user(gateway, user_id)
        if not user.is_admin:
            await gateway.insert("user_roles", {"user_id": user_id, "role": ADMIN_ROLE})
            user = user.model_copy(update={"is_admin": True})
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    logger.info("Admin %s granted admin role to %s", admin_id, user_id)
    return user


@router.delete("/users/{user_id}/admin", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_admin(
    user_id: str,
    admin_id: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> Response:
    try:
        await gateway.delete("user_roles", filters={"user_id": user_id, "role": ADMIN_ROLE})
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    logger.info("Admin %s revoked admin role from %s", admin_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    admin_id: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> Response:
    try:
        removed = await gateway.delete("profiles", filters={"id": user_id})
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc
    if not removed:
        raise _user_not_found()

    logger.info("Admin %s deleted user %s", admin_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users/{user_id}/transactions", response_model=list[TransactionRead])
async def user_transactions(
    user_id: str,
    _: str = Depends(require_admin),
    gateway: RemoteGateway = Depends(get_gateway),
) -> list[TransactionRead]:
    try:
        rows = await gateway.select(
            "transactions",
            filters={"user_id": user_id},
            order_by="date",
            descending=True,
            limit=USER_TRANSACTIONS_LIMIT,
        )
    except GatewayError as exc:
        raise _bad_gateway(exc) from exc

    return [TransactionRead.model_validate(item) for item in normalize_rows(rows, normalize_transaction)]
