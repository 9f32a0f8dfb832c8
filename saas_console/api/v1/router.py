from fastapi import APIRouter

from saas_console.api.v1.endpoints import (
    auth,
    navigation,
    dashboard,
    companies,
    packages,
    subscriptions,
    users,
    settings,
    tenant_users,
    categories,
    items,
)

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(navigation.router)
api_router.include_router(dashboard.router)

# Super-admin
api_router.include_router(companies.router)
api_router.include_router(packages.router)
api_router.include_router(subscriptions.router)
api_router.include_router(users.router)
api_router.include_router(settings.router)

# Company workspace
api_router.include_router(tenant_users.router)
api_router.include_router(categories.router)
api_router.include_router(items.router)
