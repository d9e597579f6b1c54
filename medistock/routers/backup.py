import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from medistock.dependencies import get_ledger
from medistock.services.backup_service import (
    BackupFormatError,
    backup_filename,
    dump_backup,
    restore_backup,
)
from medistock.services.ledger import LedgerStore

router = APIRouter(prefix="/backup", tags=["Backup"])
logger = logging.getLogger(__name__)


@router.get("/export")
def export_backup(ledger: LedgerStore = Depends(get_ledger)):
    payload = ledger.export_snapshot()
    return Response(
        content=dump_backup(payload),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{backup_filename(date.today())}"'
        },
    )


@router.post("/import")
async def import_backup(request: Request, ledger: LedgerStore = Depends(get_ledger)):
    body = await request.body()
    try:
        snapshot = restore_backup(ledger, body)
    except BackupFormatError as exc:
        logger.warning("Rejected backup import: %s", exc)
        raise HTTPException(status_code=400, detail="Invalid backup file") from exc
    return {
        "status": "restored",
        "medicines": len(snapshot.medicines),
        "suppliers": len(snapshot.suppliers),
        "sales": len(snapshot.sales),
        "purchases": len(snapshot.purchases),
    }


__all__ = ["router"]
