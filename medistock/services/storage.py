import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from medistock.core.dates import utc_now
from medistock.models.storage_entry import StorageEntry
from medistock.schemas.snapshot import LedgerSnapshot

logger = logging.getLogger(__name__)


class SnapshotStorage:
    """Whole-snapshot persistence under one key of the key-value table.

    Every save rewrites the entire dataset. Read and write failures are
    logged and never raised: the in-memory ledger stays authoritative.
    """

    def __init__(self, session_factory: sessionmaker, key: str):
        self.session_factory = session_factory
        self.key = key

    def load(self) -> LedgerSnapshot:
        try:
            with self.session_factory() as db:
                raw = db.execute(
                    select(StorageEntry.value).where(StorageEntry.key == self.key)
                ).scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("Failed to load local data for key %s", self.key)
            return LedgerSnapshot()

        if not raw:
            return LedgerSnapshot()
        try:
            return LedgerSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Stored data under %s is unreadable, starting empty: %s",
                self.key,
                exc,
            )
            self._set_aside(raw)
            return LedgerSnapshot()

    @property
    def corrupt_key(self) -> str:
        return f"{self.key}.corrupt"

    def _write(self, key: str, value: bytes) -> None:
        with self.session_factory() as db:
            entry = db.get(StorageEntry, key)
            if entry is None:
                db.add(StorageEntry(key=key, value=value, updated_at=utc_now()))
            else:
                entry.value = value
                entry.updated_at = utc_now()
            db.commit()

    def _set_aside(self, raw: bytes) -> None:
        # The next save rewrites the main row, so keep the unreadable bytes.
        try:
            self._write(self.corrupt_key, raw)
        except SQLAlchemyError:
            logger.exception("Failed to set aside unreadable data under %s", self.corrupt_key)
            return
        logger.warning("Unreadable data copied to %s", self.corrupt_key)

    def save(self, snapshot: LedgerSnapshot) -> bool:
        payload = snapshot.model_dump_json(by_alias=True).encode("utf-8")
        try:
            self._write(self.key, payload)
        except SQLAlchemyError:
            logger.exception("Failed to save local data for key %s", self.key)
            return False
        logger.debug("Saved %d bytes under %s", len(payload), self.key)
        return True


__all__ = ["SnapshotStorage"]
