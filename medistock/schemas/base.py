from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class LedgerModel(BaseModel):
    """Immutable record; snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def pick_changes(data: dict, clearable: frozenset) -> dict:
    """Drop explicit nulls except for fields that may be cleared."""
    return {key: value for key, value in data.items() if value is not None or key in clearable}
