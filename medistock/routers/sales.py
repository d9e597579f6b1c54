from fastapi import APIRouter, Depends, HTTPException

from medistock.dependencies import get_ledger
from medistock.schemas.sale import Sale, SaleCheckout, SaleCreate
from medistock.services.billing import EmptyCartError, UnknownMedicineError, build_sale
from medistock.services.ledger import LedgerStore

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=list[Sale])
def list_sales(ledger: LedgerStore = Depends(get_ledger)):
    return list(ledger.snapshot().sales)


@router.post("", response_model=Sale, status_code=201)
def record_sale(payload: SaleCreate, ledger: LedgerStore = Depends(get_ledger)):
    return ledger.record_sale(payload)


@router.post("/checkout", response_model=Sale, status_code=201)
def checkout(payload: SaleCheckout, ledger: LedgerStore = Depends(get_ledger)):
    try:
        sale = build_sale(
            ledger.snapshot(),
            payload.items,
            tax_percent=payload.tax_percent,
            discount=payload.discount,
            invoice_number=payload.invoice_number,
        )
    except (EmptyCartError, UnknownMedicineError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ledger.record_sale(sale)


__all__ = ["router"]
