from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from medistock.config import Settings, get_settings
from medistock.core.logging import setup_logging
from medistock.dependencies import get_ledger
from medistock.routers import (
    backup_router,
    dashboard_router,
    health_router,
    medicines_router,
    purchases_router,
    sales_router,
    suppliers_router,
)

setup_logging()
settings: Settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Load the persisted snapshot before the first request.
    get_ledger()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(medicines_router)
app.include_router(suppliers_router)
app.include_router(sales_router)
app.include_router(purchases_router)
app.include_router(dashboard_router)
app.include_router(backup_router)


@app.get("/")
def root():
    return RedirectResponse(url="/dashboard/summary", status_code=302)


__all__ = ["app", "root"]
