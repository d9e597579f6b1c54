from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from medistock.dependencies import get_ledger
from medistock.schemas.medicine import Medicine, MedicineCreate, MedicineUpdate
from medistock.services.ledger import LedgerStore
from medistock.services.report_service import expiry_status, search_medicines, stock_level

router = APIRouter(prefix="/medicines", tags=["Medicines"])


def _with_flags(medicine: Medicine, today: date) -> dict:
    status, days = expiry_status(medicine.expiry_date, today)
    data = medicine.to_wire()
    data["stockLevel"] = stock_level(medicine.quantity)
    data["expiryStatus"] = status
    data["daysToExpiry"] = days
    return data


@router.get("")
def list_medicines(
    query: Optional[str] = Query(None, description="Name, brand, barcode or batch search"),
    ledger: LedgerStore = Depends(get_ledger),
):
    today = date.today()
    matches = search_medicines(ledger.snapshot().medicines, query)
    return [_with_flags(medicine, today) for medicine in matches]


@router.get("/{medicine_id}")
def get_medicine(medicine_id: str, ledger: LedgerStore = Depends(get_ledger)):
    medicine = ledger.get_medicine(medicine_id)
    if medicine is None:
        raise HTTPException(status_code=404, detail="Medicine not found.")
    return _with_flags(medicine, date.today())


@router.post("", response_model=Medicine, status_code=201)
def create_medicine(payload: MedicineCreate, ledger: LedgerStore = Depends(get_ledger)):
    return ledger.add_medicine(payload)


@router.patch("/{medicine_id}", response_model=Medicine)
def patch_medicine(
    medicine_id: str,
    payload: MedicineUpdate,
    ledger: LedgerStore = Depends(get_ledger),
):
    medicine = ledger.update_medicine(medicine_id, payload)
    if medicine is None:
        raise HTTPException(status_code=404, detail="Medicine not found.")
    return medicine


@router.delete("/{medicine_id}", status_code=204)
def remove_medicine(medicine_id: str, ledger: LedgerStore = Depends(get_ledger)):
    if not ledger.delete_medicine(medicine_id):
        raise HTTPException(status_code=404, detail="Medicine not found.")
    return Response(status_code=204)


__all__ = ["router"]
