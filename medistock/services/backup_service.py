import json
import logging
from datetime import date

from pydantic import ValidationError

from medistock.core.constants import BACKUP_FILENAME_PREFIX
from medistock.schemas.snapshot import BackupPayload, LedgerSnapshot
from medistock.services.ledger import LedgerStore

logger = logging.getLogger(__name__)


class BackupFormatError(ValueError):
    pass


def backup_filename(today: date) -> str:
    return f"{BACKUP_FILENAME_PREFIX}-{today.isoformat()}.json"


def dump_backup(payload: BackupPayload) -> str:
    return json.dumps(payload.to_wire(), indent=2, ensure_ascii=False)


def parse_backup(text) -> LedgerSnapshot:
    """Parse a backup file. Nothing is applied here, so failures leave state intact."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise BackupFormatError(f"Backup is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise BackupFormatError("Backup must be a JSON object.")
    try:
        return LedgerSnapshot.model_validate(data)
    except ValidationError as exc:
        raise BackupFormatError(
            f"Backup does not match the ledger shape ({exc.error_count()} error(s))."
        ) from exc


def restore_backup(ledger: LedgerStore, text) -> LedgerSnapshot:
    snapshot = parse_backup(text)
    restored = ledger.import_snapshot(snapshot)
    logger.info("Backup restored successfully")
    return restored


__all__ = [
    "BackupFormatError",
    "backup_filename",
    "dump_backup",
    "parse_backup",
    "restore_backup",
]
