from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, LargeBinary, String

from medistock.database.base import Base


class StorageEntry(Base):
    """One key of the local key-value byte store."""

    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["StorageEntry"]
