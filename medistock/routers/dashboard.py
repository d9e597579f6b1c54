from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from medistock.dependencies import get_ledger
from medistock.services.ledger import LedgerStore
from medistock.services.report_service import (
    dashboard_summary,
    expiring_soon,
    export_stock_workbook,
    sales_summary,
)

router = APIRouter(tags=["Dashboard"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _local_now() -> datetime:
    return datetime.now().astimezone()


@router.get("/dashboard/summary")
def get_dashboard_summary(ledger: LedgerStore = Depends(get_ledger)):
    return dashboard_summary(ledger.snapshot(), _local_now())


@router.get("/reports/sales")
def get_sales_report(
    window: str = Query("daily", description="daily, weekly or monthly"),
    ledger: LedgerStore = Depends(get_ledger),
):
    try:
        return sales_summary(ledger.snapshot(), window, _local_now())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/reports/expiring")
def get_expiring_medicines(
    days: int | None = Query(None, ge=0, le=3650, description="Look-ahead window in days"),
    ledger: LedgerStore = Depends(get_ledger),
):
    medicines = expiring_soon(ledger.snapshot().medicines, date.today(), days)
    return [medicine.to_wire() for medicine in medicines]


@router.get("/reports/stock.xlsx")
def download_stock_report(ledger: LedgerStore = Depends(get_ledger)):
    today = date.today()
    content = export_stock_workbook(ledger.snapshot(), today)
    return Response(
        content=content,
        media_type=_XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="medistock-stock-{today.isoformat()}.xlsx"'
        },
    )


__all__ = ["router"]
