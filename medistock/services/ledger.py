import logging
import threading
import uuid
from collections import defaultdict
from typing import Mapping, Optional, Union

from medistock.core.dates import utc_now
from medistock.schemas.medicine import Medicine, MedicineCreate, MedicineUpdate
from medistock.schemas.purchase import Purchase, PurchaseCreate, PurchaseItem
from medistock.schemas.sale import Sale, SaleCreate, SaleItem
from medistock.schemas.snapshot import BackupPayload, LedgerSnapshot
from medistock.schemas.supplier import Supplier, SupplierCreate, SupplierUpdate
from medistock.services.storage import SnapshotStorage

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def _coerce(model_cls, fields):
    if isinstance(fields, model_cls):
        return fields
    return model_cls.model_validate(fields)


def _quantities_by_medicine(items) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for item in items:
        totals[item.medicine_id] += item.quantity
    return totals


class LedgerStore:
    """Sole owner of the medicines, suppliers, sales and purchases collections.

    Each operation builds a new immutable ``LedgerSnapshot``, swaps it in and
    then persists the whole snapshot. Callers only ever see complete
    snapshots, so a sale is never visible without its stock effect.
    """

    def __init__(
        self,
        storage: Optional[SnapshotStorage] = None,
        initial: Optional[LedgerSnapshot] = None,
    ):
        self._storage = storage
        self._lock = threading.RLock()
        if initial is not None:
            self._state = initial.collections()
        elif storage is not None:
            self._state = storage.load()
        else:
            self._state = LedgerSnapshot()

    @classmethod
    def open(cls, storage: SnapshotStorage) -> "LedgerStore":
        ledger = cls(storage=storage)
        state = ledger.snapshot()
        logger.info(
            "Ledger loaded: %d medicines, %d suppliers, %d sales, %d purchases",
            len(state.medicines),
            len(state.suppliers),
            len(state.sales),
            len(state.purchases),
        )
        return ledger

    # ------------------------------
    # Reads
    # ------------------------------
    def snapshot(self) -> LedgerSnapshot:
        return self._state

    def get_medicine(self, medicine_id: str) -> Optional[Medicine]:
        return next((m for m in self._state.medicines if m.id == medicine_id), None)

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return next((s for s in self._state.suppliers if s.id == supplier_id), None)

    # ------------------------------
    # Internals
    # ------------------------------
    def _commit(self, state: LedgerSnapshot) -> None:
        self._state = state
        if self._storage is not None:
            self._storage.save(state)

    # ------------------------------
    # Medicines
    # ------------------------------
    def add_medicine(self, fields: Union[MedicineCreate, Mapping]) -> Medicine:
        data = _coerce(MedicineCreate, fields)
        with self._lock:
            now = utc_now()
            medicine = Medicine(
                **data.model_dump(),
                id=new_id(),
                created_at=now,
                updated_at=now,
            )
            state = self._state
            self._commit(state.model_copy(update={"medicines": state.medicines + (medicine,)}))
        logger.info("Added medicine %s (%s)", medicine.id, medicine.name)
        return medicine

    def update_medicine(
        self, medicine_id: str, patch: Union[MedicineUpdate, Mapping]
    ) -> Optional[Medicine]:
        changes = _coerce(MedicineUpdate, patch).changes()
        updated: Optional[Medicine] = None
        with self._lock:
            state = self._state
            medicines = []
            for medicine in state.medicines:
                if medicine.id == medicine_id:
                    medicine = medicine.model_copy(update={**changes, "updated_at": utc_now()})
                    updated = medicine
                medicines.append(medicine)
            if updated is None:
                logger.debug("Medicine %s not found for update", medicine_id)
                return None
            self._commit(state.model_copy(update={"medicines": tuple(medicines)}))
        return updated

    def delete_medicine(self, medicine_id: str) -> bool:
        with self._lock:
            state = self._state
            remaining = tuple(m for m in state.medicines if m.id != medicine_id)
            removed = len(remaining) != len(state.medicines)
            self._commit(state.model_copy(update={"medicines": remaining}))
        if removed:
            logger.info("Deleted medicine %s", medicine_id)
        return removed

    # ------------------------------
    # Sales & purchases
    # ------------------------------
    def record_sale(self, fields: Union[SaleCreate, Mapping]) -> Sale:
        data = _coerce(SaleCreate, fields)
        with self._lock:
            now = utc_now()
            items = tuple(
                SaleItem(
                    id=item.id or new_id(),
                    medicine_id=item.medicine_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total=item.quantity * item.unit_price,
                )
                for item in data.items
            )
            sale = Sale(
                **data.model_dump(exclude={"items"}),
                items=items,
                id=new_id(),
                created_at=now,
            )
            state = self._state
            sold = _quantities_by_medicine(items)
            medicines = tuple(
                m.model_copy(update={"quantity": max(0, m.quantity - sold[m.id]), "updated_at": now})
                if m.id in sold
                else m
                for m in state.medicines
            )
            self._commit(
                state.model_copy(update={"sales": state.sales + (sale,), "medicines": medicines})
            )
        logger.info("Recorded sale %s (%s), %d line(s)", sale.id, sale.invoice_number, len(items))
        return sale

    def record_purchase(self, fields: Union[PurchaseCreate, Mapping]) -> Purchase:
        data = _coerce(PurchaseCreate, fields)
        with self._lock:
            now = utc_now()
            items = tuple(
                PurchaseItem(
                    id=item.id or new_id(),
                    medicine_id=item.medicine_id,
                    quantity=item.quantity,
                    unit_cost=item.unit_cost,
                    total=item.quantity * item.unit_cost,
                )
                for item in data.items
            )
            purchase = Purchase(
                **data.model_dump(exclude={"items"}),
                items=items,
                id=new_id(),
                created_at=now,
            )
            state = self._state
            received = _quantities_by_medicine(items)
            medicines = tuple(
                m.model_copy(update={"quantity": m.quantity + received[m.id], "updated_at": now})
                if m.id in received
                else m
                for m in state.medicines
            )
            self._commit(
                state.model_copy(
                    update={"purchases": state.purchases + (purchase,), "medicines": medicines}
                )
            )
        logger.info(
            "Recorded purchase %s (%s), %d line(s)",
            purchase.id,
            purchase.invoice_number or "no invoice",
            len(items),
        )
        return purchase

    # ------------------------------
    # Suppliers
    # ------------------------------
    def add_supplier(self, fields: Union[SupplierCreate, Mapping]) -> Supplier:
        data = _coerce(SupplierCreate, fields)
        with self._lock:
            now = utc_now()
            supplier = Supplier(
                **data.model_dump(),
                id=new_id(),
                created_at=now,
                updated_at=now,
            )
            state = self._state
            self._commit(state.model_copy(update={"suppliers": state.suppliers + (supplier,)}))
        logger.info("Added supplier %s (%s)", supplier.id, supplier.name)
        return supplier

    def update_supplier(
        self, supplier_id: str, patch: Union[SupplierUpdate, Mapping]
    ) -> Optional[Supplier]:
        changes = _coerce(SupplierUpdate, patch).changes()
        updated: Optional[Supplier] = None
        with self._lock:
            state = self._state
            suppliers = []
            for supplier in state.suppliers:
                if supplier.id == supplier_id:
                    supplier = supplier.model_copy(update={**changes, "updated_at": utc_now()})
                    updated = supplier
                suppliers.append(supplier)
            if updated is None:
                logger.debug("Supplier %s not found for update", supplier_id)
                return None
            self._commit(state.model_copy(update={"suppliers": tuple(suppliers)}))
        return updated

    def delete_supplier(self, supplier_id: str) -> bool:
        with self._lock:
            state = self._state
            remaining = tuple(s for s in state.suppliers if s.id != supplier_id)
            removed = len(remaining) != len(state.suppliers)
            self._commit(state.model_copy(update={"suppliers": remaining}))
        if removed:
            logger.info("Deleted supplier %s", supplier_id)
        return removed

    # ------------------------------
    # Backup
    # ------------------------------
    def export_snapshot(self) -> BackupPayload:
        state = self._state
        return BackupPayload(
            medicines=state.medicines,
            suppliers=state.suppliers,
            sales=state.sales,
            purchases=state.purchases,
            created_at=utc_now(),
        )

    def import_snapshot(self, payload: Union[LedgerSnapshot, Mapping]) -> LedgerSnapshot:
        """Replace all four collections; validation happens before anything changes."""
        if isinstance(payload, LedgerSnapshot):
            snapshot = payload.collections()
        else:
            snapshot = LedgerSnapshot.model_validate(payload)
        with self._lock:
            self._commit(snapshot)
        logger.warning(
            "Ledger replaced from snapshot: %d medicines, %d suppliers, %d sales, %d purchases",
            len(snapshot.medicines),
            len(snapshot.suppliers),
            len(snapshot.sales),
            len(snapshot.purchases),
        )
        return snapshot


__all__ = ["LedgerStore", "new_id"]
