import logging
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError

from medistock.config import get_settings
from medistock.database import SessionLocal, init_storage
from medistock.services.ledger import LedgerStore
from medistock.services.storage import SnapshotStorage

logger = logging.getLogger(__name__)


@lru_cache
def get_ledger() -> LedgerStore:
    """Process-wide ledger, loaded from local storage on first use."""
    try:
        init_storage()
    except SQLAlchemyError:
        logger.exception("Local storage unavailable, continuing in memory")
    storage = SnapshotStorage(SessionLocal, get_settings().STORAGE_KEY)
    return LedgerStore.open(storage)


__all__ = ["get_ledger"]
