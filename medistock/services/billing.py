import time
from dataclasses import dataclass
from typing import Iterable, Optional

from medistock.config import get_settings
from medistock.core.constants import PURCHASE_INVOICE_PREFIX, SALE_INVOICE_PREFIX
from medistock.schemas.purchase import PurchaseCreate, PurchaseItemCreate, ReceiptLine
from medistock.schemas.sale import CartLine, SaleCreate, SaleItemCreate
from medistock.schemas.snapshot import LedgerSnapshot


class EmptyCartError(ValueError):
    pass


class UnknownMedicineError(LookupError):
    def __init__(self, medicine_id: str):
        super().__init__(f"Unknown medicine: {medicine_id}")
        self.medicine_id = medicine_id


@dataclass(frozen=True)
class Totals:
    subtotal: float
    tax: float
    discount: float
    grand_total: float


def _money(value: float) -> float:
    return round(float(value), 2)


def line_total(quantity: int, unit_price: float) -> float:
    return _money(quantity * unit_price)


def compute_totals(line_totals: Iterable[float], tax_percent: float, discount: float = 0.0) -> Totals:
    """Subtotal plus percentage tax, minus a discount capped at the taxed amount."""
    subtotal = sum(line_totals)
    tax = subtotal * tax_percent / 100
    before_discount = subtotal + tax
    applied_discount = min(max(discount, 0.0), before_discount)
    return Totals(
        subtotal=_money(subtotal),
        tax=_money(tax),
        discount=_money(applied_discount),
        grand_total=_money(before_discount - applied_discount),
    )


def next_invoice_number(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}"


def _medicine_index(snapshot: LedgerSnapshot):
    return {medicine.id: medicine for medicine in snapshot.medicines}


def build_sale(
    snapshot: LedgerSnapshot,
    cart: Iterable[CartLine],
    *,
    tax_percent: Optional[float] = None,
    discount: float = 0.0,
    invoice_number: Optional[str] = None,
) -> SaleCreate:
    cart = list(cart)
    if not cart:
        raise EmptyCartError("Cart is empty.")
    if tax_percent is None:
        tax_percent = get_settings().SALE_TAX_PERCENT

    medicines = _medicine_index(snapshot)
    items = []
    for line in cart:
        unit_price = line.unit_price
        if unit_price is None:
            medicine = medicines.get(line.medicine_id)
            if medicine is None:
                raise UnknownMedicineError(line.medicine_id)
            unit_price = medicine.selling_price
        items.append(
            SaleItemCreate(
                medicine_id=line.medicine_id,
                quantity=max(1, line.quantity),
                unit_price=unit_price,
            )
        )

    totals = compute_totals(
        (line_total(item.quantity, item.unit_price) for item in items),
        tax_percent,
        discount,
    )
    return SaleCreate(
        invoice_number=invoice_number or next_invoice_number(SALE_INVOICE_PREFIX),
        items=tuple(items),
        subtotal=totals.subtotal,
        tax=totals.tax,
        discount=totals.discount,
        grand_total=totals.grand_total,
    )


def build_purchase(
    snapshot: LedgerSnapshot,
    lines: Iterable[ReceiptLine],
    *,
    supplier_id: Optional[str] = None,
    tax_percent: Optional[float] = None,
    invoice_number: Optional[str] = None,
) -> PurchaseCreate:
    lines = list(lines)
    if not lines:
        raise EmptyCartError("No purchase lines.")
    if tax_percent is None:
        tax_percent = get_settings().PURCHASE_TAX_PERCENT

    medicines = _medicine_index(snapshot)
    items = []
    for line in lines:
        unit_cost = line.unit_cost
        if unit_cost is None:
            medicine = medicines.get(line.medicine_id)
            if medicine is None:
                raise UnknownMedicineError(line.medicine_id)
            unit_cost = medicine.purchase_price
        items.append(
            PurchaseItemCreate(
                medicine_id=line.medicine_id,
                quantity=max(1, line.quantity),
                unit_cost=unit_cost,
            )
        )

    totals = compute_totals(
        (line_total(item.quantity, item.unit_cost) for item in items),
        tax_percent,
    )
    return PurchaseCreate(
        supplier_id=supplier_id,
        invoice_number=invoice_number or next_invoice_number(PURCHASE_INVOICE_PREFIX),
        items=tuple(items),
        subtotal=totals.subtotal,
        tax=totals.tax,
        discount=totals.discount,
        grand_total=totals.grand_total,
    )


__all__ = [
    "EmptyCartError",
    "Totals",
    "UnknownMedicineError",
    "build_purchase",
    "build_sale",
    "compute_totals",
    "line_total",
    "next_invoice_number",
]
