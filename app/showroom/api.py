from fastapi import APIRouter

from app.showroom.core.config import Settings
from app.showroom.routers.admin import router as admin_router
from app.showroom.routers.auth import router as auth_router
from app.showroom.routers.dashboard import router as dashboard_router
from app.showroom.routers.health import router as health_router
from app.showroom.routers.metrics import router as metrics_router
from app.showroom.routers.movements import router as movements_router
from app.showroom.routers.sales import router as sales_router
from app.showroom.routers.users import router as users_router
from app.showroom.routers.vehicles import router as vehicles_router


def build_api_router(settings: Settings) -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
    api_router.include_router(users_router, tags=["users"])
    api_router.include_router(sales_router, tags=["sales"])
    api_router.include_router(vehicles_router, tags=["vehicles"])
    api_router.include_router(movements_router, tags=["vehicles"])
    api_router.include_router(dashboard_router, tags=["dashboard"])
    api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
    if settings.METRICS_ENABLED:
        api_router.include_router(metrics_router, tags=["ops"])
    return api_router
