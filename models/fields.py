"""Shared pydantic field types and base schema for the JSON API."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class ApiModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _check_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("title_required", "Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError("title_too_long", "Title is too long")
    return value


def _check_description(value: str) -> str:
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError("description_too_long", "Description is too long")
    return value


def _require_datetime_string(value: Any) -> Any:
    # Numbers would otherwise be accepted as unix timestamps
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("invalid_datetime", "Invalid datetime")
    return value


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _input_as_utc(value: datetime) -> datetime:
    # A valid offset can still push the UTC value past datetime.max
    try:
        return as_utc(value)
    except OverflowError:
        raise PydanticCustomError("invalid_datetime", "Invalid datetime")


def reject_null(value: Any) -> Any:
    """Before-validator for fields that may be omitted but never sent as null."""
    if value is None:
        raise PydanticCustomError("not_nullable", "Field may not be null")
    return value


TitleStr = Annotated[str, AfterValidator(_check_title)]
DescriptionStr = Annotated[str, AfterValidator(_check_description)]

# Inbound date-time: ISO 8601 string, stored as UTC
DateTimeInput = Annotated[
    datetime,
    BeforeValidator(_require_datetime_string),
    AfterValidator(_input_as_utc),
]

# Outbound timestamp: some stores hand back naive UTC values
UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]
