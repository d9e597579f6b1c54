import argparse
import sys
from datetime import date
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from medistock.core.logging import setup_logging
from medistock.dependencies import get_ledger
from medistock.services.backup_service import (
    BackupFormatError,
    backup_filename,
    dump_backup,
    restore_backup,
)


def parse_args():
    parser = argparse.ArgumentParser(description="Export or restore a MediStock backup file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Write the ledger to a JSON backup.")
    export_parser.add_argument(
        "--output",
        default=None,
        help="Target file. Default: medistock-backup-<date>.json in the current directory.",
    )

    import_parser = subparsers.add_parser(
        "import", help="Replace the ledger with the contents of a backup."
    )
    import_parser.add_argument("path", help="Backup JSON file to restore.")
    return parser.parse_args()


def export_backup(output):
    ledger = get_ledger()
    target = Path(output) if output else Path(backup_filename(date.today()))
    target.write_text(dump_backup(ledger.export_snapshot()), encoding="utf-8")
    print(f"Backup written to {target}")


def import_backup(path):
    ledger = get_ledger()
    try:
        text = Path(path).read_text(encoding="utf-8")
        snapshot = restore_backup(ledger, text)
    except (OSError, BackupFormatError) as exc:
        raise SystemExit(f"Invalid backup file: {exc}") from exc
    print(
        f"Backup restored successfully: {len(snapshot.medicines)} medicines, "
        f"{len(snapshot.suppliers)} suppliers, {len(snapshot.sales)} sales, "
        f"{len(snapshot.purchases)} purchases"
    )


def main():
    setup_logging()
    args = parse_args()
    if args.command == "export":
        export_backup(args.output)
    else:
        import_backup(args.path)


if __name__ == "__main__":
    main()
