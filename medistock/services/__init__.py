from medistock.services.backup_service import BackupFormatError, restore_backup
from medistock.services.billing import build_purchase, build_sale, compute_totals
from medistock.services.ledger import LedgerStore
from medistock.services.report_service import dashboard_summary, sales_summary
from medistock.services.storage import SnapshotStorage

__all__ = [
    "BackupFormatError",
    "LedgerStore",
    "SnapshotStorage",
    "build_purchase",
    "build_sale",
    "compute_totals",
    "dashboard_summary",
    "restore_backup",
    "sales_summary",
]
