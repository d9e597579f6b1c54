from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from medistock.config import get_settings
from medistock.dependencies import get_ledger
from medistock.services.ledger import LedgerStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(ledger: LedgerStore = Depends(get_ledger)):
    settings = get_settings()
    snapshot = ledger.snapshot()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
        "counts": {
            "medicines": len(snapshot.medicines),
            "suppliers": len(snapshot.suppliers),
            "sales": len(snapshot.sales),
            "purchases": len(snapshot.purchases),
        },
    }
