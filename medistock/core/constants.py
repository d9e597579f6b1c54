SALES_WINDOWS = {
    "daily": 0,
    "weekly": 7,
    "monthly": 30,
}

SALE_INVOICE_PREFIX = "INV"
PURCHASE_INVOICE_PREFIX = "PUR"
BACKUP_FILENAME_PREFIX = "medistock-backup"
