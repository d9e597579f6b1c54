from fastapi import APIRouter, Depends, HTTPException

from medistock.dependencies import get_ledger
from medistock.schemas.purchase import Purchase, PurchaseCreate, PurchaseReceipt
from medistock.services.billing import EmptyCartError, UnknownMedicineError, build_purchase
from medistock.services.ledger import LedgerStore

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.get("", response_model=list[Purchase])
def list_purchases(ledger: LedgerStore = Depends(get_ledger)):
    return list(ledger.snapshot().purchases)


@router.post("", response_model=Purchase, status_code=201)
def record_purchase(payload: PurchaseCreate, ledger: LedgerStore = Depends(get_ledger)):
    return ledger.record_purchase(payload)


@router.post("/receive", response_model=Purchase, status_code=201)
def receive_stock(payload: PurchaseReceipt, ledger: LedgerStore = Depends(get_ledger)):
    try:
        purchase = build_purchase(
            ledger.snapshot(),
            payload.items,
            supplier_id=payload.supplier_id,
            tax_percent=payload.tax_percent,
            invoice_number=payload.invoice_number,
        )
    except (EmptyCartError, UnknownMedicineError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ledger.record_purchase(purchase)


__all__ = ["router"]
