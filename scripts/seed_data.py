import argparse
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from medistock.core.logging import setup_logging
from medistock.dependencies import get_ledger
from medistock.schemas.snapshot import LedgerSnapshot


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample pharmacy data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    ledger = get_ledger()
    if args.reset:
        ledger.import_snapshot(LedgerSnapshot())

    if ledger.snapshot().medicines:
        print("Seed skipped: medicines already exist.")
        return

    supplier = ledger.add_supplier(
        {
            "name": "Sunrise Pharma Distributors",
            "phone": "+91 98450 12345",
            "gst_number": "29ABCDE1234F1Z5",
        }
    )
    today = date.today()
    medicines = [
        {
            "name": "Paracetamol 500mg",
            "brand": "Calpol",
            "batch_number": "CP2401",
            "category": "Analgesic",
            "purchase_price": 1.2,
            "selling_price": 2.0,
            "quantity": 120,
            "expiry_date": today + timedelta(days=400),
            "supplier_id": supplier.id,
            "barcode": "8901234500011",
        },
        {
            "name": "Amoxicillin 250mg",
            "brand": "Mox",
            "batch_number": "MX0912",
            "category": "Antibiotic",
            "purchase_price": 4.5,
            "selling_price": 6.75,
            "quantity": 8,
            "expiry_date": today + timedelta(days=12),
            "supplier_id": supplier.id,
        },
        {
            "name": "Cetirizine 10mg",
            "brand": "Okacet",
            "batch_number": "OK3310",
            "category": "Antihistamine",
            "purchase_price": 0.8,
            "selling_price": 1.5,
            "quantity": 0,
            "expiry_date": today - timedelta(days=3),
        },
    ]
    for fields in medicines:
        ledger.add_medicine(fields)
    print("Seed data created.")


if __name__ == "__main__":
    main()
