import json
import unittest
from datetime import date

from medistock.services.backup_service import (
    BackupFormatError,
    backup_filename,
    dump_backup,
    parse_backup,
    restore_backup,
)
from medistock.services.ledger import LedgerStore

LEGACY_BACKUP = {
    "medicines": [
        {
            "id": "3f1c2a4e-0000-4000-8000-000000000001",
            "name": "Amoxicillin 250mg",
            "brand": "Mox",
            "batchNumber": "MX0912",
            "category": "Antibiotic",
            "purchasePrice": 4.5,
            "sellingPrice": 6.75,
            "quantity": 8,
            "expiryDate": "",
            "createdAt": "2025-03-01T10:15:00.000Z",
            "updatedAt": "2025-03-02T08:00:00.000Z",
        }
    ],
    "suppliers": [],
    "sales": [
        {
            "id": "3f1c2a4e-0000-4000-8000-000000000002",
            "invoiceNumber": "INV-1740824100000",
            "items": [
                {
                    "id": "3f1c2a4e-0000-4000-8000-000000000001",
                    "medicineId": "3f1c2a4e-0000-4000-8000-000000000001",
                    "quantity": 2,
                    "unitPrice": 6.75,
                    "total": 13.5,
                }
            ],
            "subtotal": 13.5,
            "tax": 0.675,
            "discount": 0,
            "grandTotal": 14.175,
            "createdAt": "2025-03-02T08:00:00.000Z",
        }
    ],
    "createdAt": "2025-03-03T00:00:00.000Z",
}


class BackupServiceTest(unittest.TestCase):
    def setUp(self):
        self.ledger = LedgerStore()
        medicine = self.ledger.add_medicine(
            {"name": "Paracetamol", "quantity": 20, "selling_price": 2.0}
        )
        self.ledger.record_sale(
            {
                "invoice_number": "INV-1",
                "items": [{"medicine_id": medicine.id, "quantity": 5, "unit_price": 2.0}],
                "subtotal": 10.0,
                "tax": 0.5,
                "grand_total": 10.5,
            }
        )

    def test_backup_filename_uses_export_date(self):
        self.assertEqual(
            backup_filename(date(2026, 10, 19)),
            "medistock-backup-2026-10-19.json",
        )

    def test_dump_backup_is_readable_json_with_export_timestamp(self):
        text = dump_backup(self.ledger.export_snapshot())
        data = json.loads(text)

        self.assertIn("\n  ", text)
        self.assertIn("createdAt", data)
        self.assertEqual(data["sales"][0]["grandTotal"], 10.5)

    def test_restore_of_exported_backup_reproduces_ledger(self):
        text = dump_backup(self.ledger.export_snapshot())
        other = LedgerStore()

        restore_backup(other, text)

        self.assertEqual(other.snapshot(), self.ledger.snapshot())

    def test_parse_accepts_legacy_backup(self):
        snapshot = parse_backup(json.dumps(LEGACY_BACKUP))

        medicine = snapshot.medicines[0]
        self.assertEqual(medicine.batch_number, "MX0912")
        self.assertIsNone(medicine.expiry_date)
        self.assertEqual(snapshot.sales[0].items[0].unit_price, 6.75)
        self.assertEqual(snapshot.purchases, ())

    def test_invalid_json_is_rejected(self):
        with self.assertRaises(BackupFormatError):
            parse_backup("{medicines: oops")

    def test_non_object_backup_is_rejected(self):
        with self.assertRaises(BackupFormatError):
            parse_backup("[1, 2, 3]")

    def test_failed_restore_leaves_ledger_untouched(self):
        before = self.ledger.snapshot()
        broken = json.dumps({"medicines": [{"name": "No id"}], "sales": []})

        with self.assertRaises(BackupFormatError):
            restore_backup(self.ledger, broken)

        self.assertEqual(self.ledger.snapshot(), before)


if __name__ == "__main__":
    unittest.main()
