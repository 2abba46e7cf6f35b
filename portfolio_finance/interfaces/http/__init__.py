from fastapi import APIRouter, Depends

from portfolio_finance.core.security import require_admin
from portfolio_finance.interfaces.http.routers import (
    categories,
    dashboard,
    expenses,
    health,
    income,
    notifications,
    payments,
    people,
    sync,
    wallets,
)


def create_api_router(finance_prefix: str = "/admin/finance") -> APIRouter:
    router = APIRouter()
    admin = [Depends(require_admin)]

    finance = APIRouter(prefix=finance_prefix, dependencies=admin)
    finance.include_router(dashboard.router, tags=["Dashboard"])
    finance.include_router(expenses.router, tags=["Expenses"])
    finance.include_router(income.router, tags=["Income"])
    finance.include_router(payments.router, tags=["Payments"])
    finance.include_router(wallets.router, tags=["Wallets"])
    finance.include_router(people.router, tags=["People"])
    finance.include_router(categories.router, tags=["Categories"])
    finance.include_router(sync.router, tags=["Sync"])

    router.include_router(finance)
    router.include_router(notifications.router, prefix="/admin/notifications", tags=["Notifications"], dependencies=admin)
    router.include_router(health.router, tags=["Health"])
    return router


__all__ = [
    "create_api_router",
]
