"""Shared schema building blocks."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from backend.app.services.money import format_money


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values for columns stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# Money and other two-place decimals travel as strings such as "1200.00"
Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="json")]

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Schema with camelCase keys on the wire; snake_case names are accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
