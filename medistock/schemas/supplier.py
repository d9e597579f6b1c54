from typing import Optional

from pydantic import Field

from medistock.schemas.base import LedgerModel, UtcDatetime, pick_changes

_CLEARABLE_FIELDS = frozenset({"phone", "email", "address", "gst_number", "notes"})


class SupplierBase(LedgerModel):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    notes: Optional[str] = None


class SupplierCreate(SupplierBase):
    name: str = Field(min_length=1)


class SupplierUpdate(LedgerModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gst_number: Optional[str] = None
    notes: Optional[str] = None

    def changes(self) -> dict:
        return pick_changes(self.model_dump(exclude_unset=True), _CLEARABLE_FIELDS)


class Supplier(SupplierBase):
    id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


__all__ = ["Supplier", "SupplierBase", "SupplierCreate", "SupplierUpdate"]
