from medistock.routers.backup import router as backup_router
from medistock.routers.dashboard import router as dashboard_router
from medistock.routers.health import router as health_router
from medistock.routers.medicines import router as medicines_router
from medistock.routers.purchases import router as purchases_router
from medistock.routers.sales import router as sales_router
from medistock.routers.suppliers import router as suppliers_router

__all__ = [
    "backup_router",
    "dashboard_router",
    "health_router",
    "medicines_router",
    "purchases_router",
    "sales_router",
    "suppliers_router",
]
