import logging

import uvicorn
from fastapi import FastAPI

from financeflow.api.admin import router as admin_router
from financeflow.api.budgets import router as budgets_router
from financeflow.api.categories import router as categories_router
from financeflow.api.exports import router as exports_router
from financeflow.api.gate import router as gate_router
from financeflow.api.goals import router as goals_router
from financeflow.api.notifications import router as notifications_router
from financeflow.api.profile import router as profile_router
from financeflow.api.recurring import router as recurring_router
from financeflow.api.reports import router as reports_router
from financeflow.api.todos import router as todos_router
from financeflow.api.transactions import router as transactions_router
from financeflow.db.seed import seed_initial_data
from financeflow.db.session import AsyncSessionLocal
from financeflow.db.settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0")


@app.on_event("startup")
async def on_startup() -> None:
    if not settings.seed_demo:
        return
    async with AsyncSessionLocal() as session:
        await seed_initial_data(session, seed_demo=settings.seed_demo, demo_user_id=settings.demo_user_id)


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(gate_router)
app.include_router(transactions_router)
app.include_router(categories_router)
app.include_router(budgets_router)
app.include_router(goals_router)
app.include_router(todos_router)
app.include_router(recurring_router)
app.include_router(notifications_router)
app.include_router(profile_router)
app.include_router(reports_router)
app.include_router(exports_router)
app.include_router(admin_router)


def run() -> None:
    uvicorn.run("financeflow.main:app", host=settings.app_host, port=settings.app_port)
