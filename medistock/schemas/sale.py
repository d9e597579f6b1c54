from typing import Optional

from pydantic import model_validator

from medistock.schemas.base import LedgerModel, UtcDatetime


class SaleItemCreate(LedgerModel):
    id: Optional[str] = None
    medicine_id: str
    quantity: int
    unit_price: float


class SaleItem(LedgerModel):
    id: str
    medicine_id: str
    quantity: int
    unit_price: float
    total: float

    @model_validator(mode="before")
    @classmethod
    def _fill_total(cls, data):
        if isinstance(data, dict) and data.get("total") is None:
            quantity = data.get("quantity", 0) or 0
            unit_price = data.get("unit_price", data.get("unitPrice", 0)) or 0
            data = {**data, "total": float(quantity) * float(unit_price)}
        return data


class SaleCreate(LedgerModel):
    invoice_number: str
    items: tuple[SaleItemCreate, ...] = ()
    subtotal: float = 0.0
    tax: float = 0.0
    discount: float = 0.0
    grand_total: float = 0.0


class Sale(LedgerModel):
    id: str
    invoice_number: str
    items: tuple[SaleItem, ...] = ()
    subtotal: float = 0.0
    tax: float = 0.0
    discount: float = 0.0
    grand_total: float = 0.0
    created_at: UtcDatetime

    @property
    def units(self) -> int:
        return sum(item.quantity for item in self.items)


class CartLine(LedgerModel):
    medicine_id: str
    quantity: int = 1
    unit_price: Optional[float] = None


class SaleCheckout(LedgerModel):
    items: list[CartLine]
    tax_percent: Optional[float] = None
    discount: float = 0.0
    invoice_number: Optional[str] = None


__all__ = ["CartLine", "Sale", "SaleCheckout", "SaleCreate", "SaleItem", "SaleItemCreate"]
