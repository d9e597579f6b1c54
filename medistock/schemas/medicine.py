from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from medistock.core.dates import normalize_date
from medistock.schemas.base import LedgerModel, UtcDatetime, pick_changes

_CLEARABLE_FIELDS = frozenset({"expiry_date", "supplier_id", "barcode"})


def _coerce_expiry(value):
    # Stored data uses "" for "no expiry".
    if isinstance(value, str) and not value.strip():
        return None
    normalized = normalize_date(value)
    return value if normalized is None else normalized


class MedicineBase(LedgerModel):
    name: str
    brand: str = ""
    batch_number: str = ""
    category: str = ""
    purchase_price: float = 0.0
    selling_price: float = 0.0
    quantity: int = 0
    expiry_date: Optional[date] = None
    supplier_id: Optional[str] = None
    barcode: Optional[str] = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _blank_expiry(cls, value):
        return _coerce_expiry(value)


class MedicineCreate(MedicineBase):
    name: str = Field(min_length=1)
    purchase_price: float = Field(0.0, ge=0)
    selling_price: float = Field(0.0, ge=0)
    quantity: int = Field(0, ge=0)


class MedicineUpdate(LedgerModel):
    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = None
    batch_number: Optional[str] = None
    category: Optional[str] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    expiry_date: Optional[date] = None
    supplier_id: Optional[str] = None
    barcode: Optional[str] = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _blank_expiry(cls, value):
        return _coerce_expiry(value)

    def changes(self) -> dict:
        return pick_changes(self.model_dump(exclude_unset=True), _CLEARABLE_FIELDS)


class Medicine(MedicineBase):
    id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


__all__ = ["Medicine", "MedicineBase", "MedicineCreate", "MedicineUpdate"]
