import io
from datetime import date, datetime
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font

from medistock.config import get_settings
from medistock.core.constants import SALES_WINDOWS
from medistock.core.dates import days_until, start_of_day
from medistock.schemas.medicine import Medicine
from medistock.schemas.snapshot import LedgerSnapshot

_STOCK_COLUMNS = (
    "Name",
    "Brand",
    "Batch",
    "Category",
    "Quantity",
    "Selling Price",
    "Expiry",
    "Stock Level",
    "Expiry Status",
)


def search_medicines(medicines: Iterable[Medicine], query: Optional[str]) -> list[Medicine]:
    medicines = list(medicines)
    needle = (query or "").strip().lower()
    if not needle:
        return medicines
    matches = []
    for medicine in medicines:
        haystack = (
            medicine.name,
            medicine.brand,
            medicine.barcode or "",
            medicine.batch_number,
        )
        if any(needle in value.lower() for value in haystack):
            matches.append(medicine)
    return matches


def stock_level(quantity: int) -> str:
    if quantity <= 0:
        return "OUT"
    if quantity <= 5:
        return "CRITICAL"
    if quantity <= 10:
        return "LOW"
    return "OK"


def expiry_status(expiry_date: Optional[date], today: date) -> tuple[str, Optional[int]]:
    if expiry_date is None:
        return "NONE", None
    days = days_until(expiry_date, today)
    if days < 0:
        return "EXPIRED", days
    if days <= 7:
        return "EXPIRING_7", days
    if days <= 15:
        return "EXPIRING_15", days
    if days <= 30:
        return "EXPIRING_30", days
    return "OK", days


def _sales_since(snapshot: LedgerSnapshot, since: datetime):
    return [sale for sale in snapshot.sales if sale.created_at >= since]


def dashboard_summary(snapshot: LedgerSnapshot, now: datetime) -> dict:
    settings = get_settings()
    today = now.date()
    low_stock = [
        m for m in snapshot.medicines if 0 < m.quantity <= settings.LOW_STOCK_THRESHOLD
    ]
    expired = [
        m for m in snapshot.medicines if m.expiry_date is not None and m.expiry_date < today
    ]
    today_sales = _sales_since(snapshot, start_of_day(now))
    return {
        "total_medicines": len(snapshot.medicines),
        "low_stock_count": len(low_stock),
        "expired_count": len(expired),
        "today_sales": round(sum(sale.grand_total for sale in today_sales), 2),
        "units_sold": sum(sale.units for sale in snapshot.sales),
    }


def sales_summary(snapshot: LedgerSnapshot, window: str, now: datetime) -> dict:
    if window not in SALES_WINDOWS:
        raise ValueError(
            "Unknown sales window: {} (expected one of {})".format(
                window, ", ".join(SALES_WINDOWS)
            )
        )
    since = start_of_day(now, SALES_WINDOWS[window])
    relevant = _sales_since(snapshot, since)
    return {
        "window": window,
        "since": since,
        "total_sales": round(sum(sale.grand_total for sale in relevant), 2),
        "bill_count": len(relevant),
        "items_sold": sum(sale.units for sale in relevant),
    }


def expiring_soon(
    medicines: Iterable[Medicine], today: date, days: Optional[int] = None
) -> list[Medicine]:
    if days is None:
        days = get_settings().EXPIRY_WARNING_DAYS
    soon = [
        m
        for m in medicines
        if m.expiry_date is not None and 0 <= days_until(m.expiry_date, today) <= days
    ]
    return sorted(soon, key=lambda m: m.expiry_date)


def export_stock_workbook(snapshot: LedgerSnapshot, today: date) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Stock"
    worksheet.append(list(_STOCK_COLUMNS))
    for cell in worksheet[1]:
        cell.font = Font(bold=True)

    for medicine in sorted(snapshot.medicines, key=lambda m: m.name.lower()):
        status, _days = expiry_status(medicine.expiry_date, today)
        worksheet.append(
            [
                medicine.name,
                medicine.brand,
                medicine.batch_number,
                medicine.category,
                medicine.quantity,
                medicine.selling_price,
                medicine.expiry_date,
                stock_level(medicine.quantity),
                status,
            ]
        )
    worksheet.freeze_panes = "A2"

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


__all__ = [
    "dashboard_summary",
    "expiring_soon",
    "expiry_status",
    "export_stock_workbook",
    "sales_summary",
    "search_medicines",
    "stock_level",
]
