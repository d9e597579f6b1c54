from fastapi import APIRouter, Depends, HTTPException, Response

from medistock.dependencies import get_ledger
from medistock.schemas.supplier import Supplier, SupplierCreate, SupplierUpdate
from medistock.services.ledger import LedgerStore

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("", response_model=list[Supplier])
def list_suppliers(ledger: LedgerStore = Depends(get_ledger)):
    return list(ledger.snapshot().suppliers)


@router.get("/{supplier_id}", response_model=Supplier)
def get_supplier(supplier_id: str, ledger: LedgerStore = Depends(get_ledger)):
    supplier = ledger.get_supplier(supplier_id)
    if supplier is None:
        raise HTTPException(status_code=404, detail="Supplier not found.")
    return supplier


@router.post("", response_model=Supplier, status_code=201)
def create_supplier(payload: SupplierCreate, ledger: LedgerStore = Depends(get_ledger)):
    return ledger.add_supplier(payload)


@router.patch("/{supplier_id}", response_model=Supplier)
def patch_supplier(
    supplier_id: str,
    payload: SupplierUpdate,
    ledger: LedgerStore = Depends(get_ledger),
):
    supplier = ledger.update_supplier(supplier_id, payload)
    if supplier is None:
        raise HTTPException(status_code=404, detail="Supplier not found.")
    return supplier


@router.delete("/{supplier_id}", status_code=204)
def remove_supplier(supplier_id: str, ledger: LedgerStore = Depends(get_ledger)):
    if not ledger.delete_supplier(supplier_id):
        raise HTTPException(status_code=404, detail="Supplier not found.")
    return Response(status_code=204)


__all__ = ["router"]
