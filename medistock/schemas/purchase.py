from typing import Optional

from pydantic import model_validator

from medistock.schemas.base import LedgerModel, UtcDatetime


class PurchaseItemCreate(LedgerModel):
    id: Optional[str] = None
    medicine_id: str
    quantity: int
    unit_cost: float


class PurchaseItem(LedgerModel):
    id: str
    medicine_id: str
    quantity: int
    unit_cost: float
    total: float

    @model_validator(mode="before")
    @classmethod
    def _fill_total(cls, data):
        if isinstance(data, dict) and data.get("total") is None:
            quantity = data.get("quantity", 0) or 0
            unit_cost = data.get("unit_cost", data.get("unitCost", 0)) or 0
            data = {**data, "total": float(quantity) * float(unit_cost)}
        return data


class PurchaseCreate(LedgerModel):
    supplier_id: Optional[str] = None
    invoice_number: Optional[str] = None
    items: tuple[PurchaseItemCreate, ...] = ()
    subtotal: float = 0.0
    tax: float = 0.0
    discount: float = 0.0
    grand_total: float = 0.0


class Purchase(LedgerModel):
    id: str
    supplier_id: Optional[str] = None
    invoice_number: Optional[str] = None
    items: tuple[PurchaseItem, ...] = ()
    subtotal: float = 0.0
    tax: float = 0.0
    discount: float = 0.0
    grand_total: float = 0.0
    created_at: UtcDatetime


class ReceiptLine(LedgerModel):
    medicine_id: str
    quantity: int = 1
    unit_cost: Optional[float] = None


class PurchaseReceipt(LedgerModel):
    items: list[ReceiptLine]
    supplier_id: Optional[str] = None
    tax_percent: Optional[float] = None
    invoice_number: Optional[str] = None


__all__ = [
    "Purchase",
    "PurchaseCreate",
    "PurchaseItem",
    "PurchaseItemCreate",
    "PurchaseReceipt",
    "ReceiptLine",
]
