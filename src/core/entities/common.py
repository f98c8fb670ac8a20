"""Shared model base and datetime helpers for domain entities."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SECONDS_PER_DAY = 86400


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so every comparison is aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class DomainModel(BaseModel):
    """
    Base for entities exchanged with the data provider.

    The remote API speaks camelCase JSON (itemId, lastMovedDate); python code
    uses snake_case. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
