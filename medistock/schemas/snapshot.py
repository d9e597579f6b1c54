from pydantic import field_validator

from medistock.schemas.base import LedgerModel, UtcDatetime
from medistock.schemas.medicine import Medicine
from medistock.schemas.purchase import Purchase
from medistock.schemas.sale import Sale
from medistock.schemas.supplier import Supplier


class LedgerSnapshot(LedgerModel):
    medicines: tuple[Medicine, ...] = ()
    suppliers: tuple[Supplier, ...] = ()
    sales: tuple[Sale, ...] = ()
    purchases: tuple[Purchase, ...] = ()

    @field_validator("medicines", "suppliers", "sales", "purchases", mode="before")
    @classmethod
    def _missing_as_empty(cls, value):
        return () if value is None else value

    def collections(self) -> "LedgerSnapshot":
        """Plain snapshot with only the four collections."""
        return LedgerSnapshot(
            medicines=self.medicines,
            suppliers=self.suppliers,
            sales=self.sales,
            purchases=self.purchases,
        )


class BackupPayload(LedgerSnapshot):
    created_at: UtcDatetime


__all__ = ["BackupPayload", "LedgerSnapshot"]
