import unittest
from datetime import date

from pydantic import ValidationError

from medistock.schemas.purchase import ReceiptLine
from medistock.schemas.sale import SaleCreate, SaleItemCreate
from medistock.services.billing import build_purchase, compute_totals
from medistock.services.ledger import LedgerStore


def medicine_fields(**overrides):
    fields = {
        "name": "Paracetamol",
        "brand": "Calpol",
        "batch_number": "CP2401",
        "category": "Analgesic",
        "purchase_price": 1.2,
        "selling_price": 2.0,
        "quantity": 20,
        "expiry_date": date(2027, 6, 30),
    }
    fields.update(overrides)
    return fields


def sale_of(medicine_id, quantity, unit_price, invoice="INV-1"):
    return SaleCreate(
        invoice_number=invoice,
        items=(SaleItemCreate(medicine_id=medicine_id, quantity=quantity, unit_price=unit_price),),
    )


class LedgerMedicineTest(unittest.TestCase):
    def setUp(self):
        self.ledger = LedgerStore()

    def test_add_medicine_assigns_identity_and_timestamps(self):
        medicine = self.ledger.add_medicine(medicine_fields())

        self.assertTrue(medicine.id)
        self.assertEqual(medicine.created_at, medicine.updated_at)
        self.assertEqual(self.ledger.snapshot().medicines, (medicine,))
        self.assertEqual(medicine.expiry_date, date(2027, 6, 30))

    def test_duplicate_batches_are_allowed(self):
        first = self.ledger.add_medicine(medicine_fields())
        second = self.ledger.add_medicine(medicine_fields())

        self.assertNotEqual(first.id, second.id)
        self.assertEqual(len(self.ledger.snapshot().medicines), 2)

    def test_update_medicine_merges_fields(self):
        original = self.ledger.add_medicine(medicine_fields())

        updated = self.ledger.update_medicine(original.id, {"quantity": 7, "brand": "Dolo"})

        self.assertEqual(updated.id, original.id)
        self.assertEqual(updated.quantity, 7)
        self.assertEqual(updated.brand, "Dolo")
        self.assertEqual(updated.name, "Paracetamol")
        self.assertEqual(updated.created_at, original.created_at)
        self.assertGreaterEqual(updated.updated_at, original.updated_at)
        self.assertEqual(self.ledger.get_medicine(original.id), updated)

    def test_update_can_clear_expiry(self):
        original = self.ledger.add_medicine(medicine_fields())

        updated = self.ledger.update_medicine(original.id, {"expiryDate": ""})

        self.assertIsNone(updated.expiry_date)

    def test_update_unknown_medicine_returns_none_and_changes_nothing(self):
        self.ledger.add_medicine(medicine_fields())
        before = self.ledger.snapshot().medicines

        result = self.ledger.update_medicine("missing", {"quantity": 99})

        self.assertIsNone(result)
        self.assertEqual(self.ledger.snapshot().medicines, before)
        self.assertEqual(len(self.ledger.snapshot().medicines), 1)

    def test_delete_medicine_leaves_sales_with_dangling_reference(self):
        medicine = self.ledger.add_medicine(medicine_fields())
        sale = self.ledger.record_sale(sale_of(medicine.id, 2, 2.0))

        self.assertTrue(self.ledger.delete_medicine(medicine.id))

        self.assertEqual(self.ledger.snapshot().medicines, ())
        self.assertEqual(self.ledger.snapshot().sales, (sale,))
        self.assertEqual(sale.items[0].medicine_id, medicine.id)

    def test_delete_unknown_medicine_reports_nothing_removed(self):
        self.ledger.add_medicine(medicine_fields())

        self.assertFalse(self.ledger.delete_medicine("missing"))
        self.assertEqual(len(self.ledger.snapshot().medicines), 1)


class LedgerStockMovementTest(unittest.TestCase):
    def setUp(self):
        self.ledger = LedgerStore()

    def test_sale_with_tax_decrements_stock(self):
        medicine = self.ledger.add_medicine(
            medicine_fields(name="Paracetamol", quantity=20, selling_price=2.0)
        )
        totals = compute_totals([5 * 2.0], tax_percent=5, discount=0)

        sale = self.ledger.record_sale(
            SaleCreate(
                invoice_number="INV-100",
                items=(SaleItemCreate(medicine_id=medicine.id, quantity=5, unit_price=2.0),),
                subtotal=totals.subtotal,
                tax=totals.tax,
                discount=totals.discount,
                grand_total=totals.grand_total,
            )
        )

        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 15)
        self.assertAlmostEqual(sale.subtotal, 10.0)
        self.assertAlmostEqual(sale.grand_total, 10.5)
        self.assertAlmostEqual(sale.items[0].total, 10.0)
        self.assertTrue(sale.items[0].id)
        self.assertEqual(self.ledger.snapshot().sales, (sale,))

    def test_oversell_clamps_stock_at_zero(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=3))

        sale = self.ledger.record_sale(sale_of(medicine.id, 5, 2.0))

        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 0)
        self.assertEqual(sale.items[0].quantity, 5)
        self.assertAlmostEqual(sale.items[0].total, 10.0)

    def test_line_total_is_the_exact_product(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=10))

        sale = self.ledger.record_sale(sale_of(medicine.id, 3, 0.1))
        purchase = self.ledger.record_purchase(
            {"items": [{"medicine_id": medicine.id, "quantity": 3, "unit_cost": 0.335}]}
        )

        self.assertEqual(sale.items[0].total, 3 * 0.1)
        self.assertEqual(purchase.items[0].total, 3 * 0.335)

    def test_repeated_sales_never_go_negative(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=10))

        for quantity in (4, 7, 1, 50, 3):
            self.ledger.record_sale(sale_of(medicine.id, quantity, 2.0))
            self.assertGreaterEqual(self.ledger.get_medicine(medicine.id).quantity, 0)

        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 0)
        self.assertEqual(len(self.ledger.snapshot().sales), 5)

    def test_sale_lines_for_the_same_medicine_are_summed(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=10))

        self.ledger.record_sale(
            SaleCreate(
                invoice_number="INV-2",
                items=(
                    SaleItemCreate(medicine_id=medicine.id, quantity=2, unit_price=2.0),
                    SaleItemCreate(medicine_id=medicine.id, quantity=3, unit_price=2.0),
                ),
            )
        )

        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 5)

    def test_sale_of_unknown_medicine_is_recorded_without_stock_effect(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=10))
        before = self.ledger.get_medicine(medicine.id)

        sale = self.ledger.record_sale(sale_of("ghost", 4, 1.0))

        self.assertEqual(self.ledger.get_medicine(medicine.id), before)
        self.assertEqual(self.ledger.snapshot().sales, (sale,))

    def test_purchase_then_sale_restores_quantity(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=6))

        self.ledger.record_purchase(
            {"items": [{"medicine_id": medicine.id, "quantity": 12, "unit_cost": 1.0}]}
        )
        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 18)

        self.ledger.record_sale(sale_of(medicine.id, 12, 2.0))
        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 6)

    def test_purchase_of_empty_stock(self):
        medicine = self.ledger.add_medicine(medicine_fields(quantity=0))
        draft = build_purchase(
            self.ledger.snapshot(),
            [ReceiptLine(medicine_id=medicine.id, quantity=10, unit_cost=1.5)],
        )

        purchase = self.ledger.record_purchase(draft)

        self.assertEqual(self.ledger.get_medicine(medicine.id).quantity, 10)
        self.assertAlmostEqual(purchase.subtotal, 15.0)
        self.assertAlmostEqual(purchase.items[0].total, 15.0)
        self.assertEqual(self.ledger.snapshot().purchases, (purchase,))


class LedgerSupplierTest(unittest.TestCase):
    def setUp(self):
        self.ledger = LedgerStore()

    def test_supplier_lifecycle(self):
        supplier = self.ledger.add_supplier({"name": "Sunrise Pharma", "phone": "12345"})
        medicine = self.ledger.add_medicine(medicine_fields(supplier_id=supplier.id))

        updated = self.ledger.update_supplier(supplier.id, {"gstNumber": "29ABCDE1234F1Z5"})
        self.assertEqual(updated.gst_number, "29ABCDE1234F1Z5")
        self.assertEqual(updated.phone, "12345")

        self.assertTrue(self.ledger.delete_supplier(supplier.id))
        self.assertEqual(self.ledger.snapshot().suppliers, ())
        self.assertEqual(self.ledger.get_medicine(medicine.id).supplier_id, supplier.id)

    def test_update_unknown_supplier_returns_none(self):
        self.assertIsNone(self.ledger.update_supplier("missing", {"name": "X"}))

    def test_supplier_name_is_required(self):
        with self.assertRaises(ValidationError):
            self.ledger.add_supplier({"phone": "12345"})
        self.assertEqual(self.ledger.snapshot().suppliers, ())


class LedgerSnapshotTest(unittest.TestCase):
    def setUp(self):
        self.ledger = LedgerStore()
        medicine = self.ledger.add_medicine(medicine_fields())
        self.ledger.add_supplier({"name": "Sunrise Pharma"})
        self.ledger.record_sale(sale_of(medicine.id, 2, 2.0))
        self.ledger.record_purchase(
            {"items": [{"medicineId": medicine.id, "quantity": 5, "unitCost": 1.2}]}
        )

    def test_export_then_import_is_a_no_op(self):
        before = self.ledger.snapshot()

        payload = self.ledger.export_snapshot()
        self.ledger.import_snapshot(payload)

        self.assertEqual(self.ledger.snapshot(), before)
        self.assertIsNotNone(payload.created_at)

    def test_import_of_empty_mapping_clears_every_collection(self):
        self.ledger.import_snapshot({})

        snapshot = self.ledger.snapshot()
        self.assertEqual(snapshot.medicines, ())
        self.assertEqual(snapshot.suppliers, ())
        self.assertEqual(snapshot.sales, ())
        self.assertEqual(snapshot.purchases, ())

    def test_import_of_malformed_payload_leaves_ledger_untouched(self):
        before = self.ledger.snapshot()

        with self.assertRaises(ValidationError):
            self.ledger.import_snapshot({"medicines": [{"brand": "no id or name"}]})

        self.assertEqual(self.ledger.snapshot(), before)


if __name__ == "__main__":
    unittest.main()
