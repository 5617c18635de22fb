"""
Shared field types for preference schemas.

These annotated types are the schema-level validation boundary: a record
that reaches the personalization services has already passed them.
"""

from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AfterValidator, Field

# 24-hour "HH:MM", zero padded
TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def _validate_timezone(value: str) -> str:
    """Reject zone names the IANA database does not know."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {value}") from e
    return value


TimeOfDay = Annotated[
    str,
    Field(pattern=TIME_OF_DAY_PATTERN, examples=["09:00", "22:30"]),
]

TimezoneName = Annotated[
    str,
    AfterValidator(_validate_timezone),
    Field(examples=["UTC", "America/New_York"]),
]

UserId = Annotated[
    str,
    Field(min_length=1, max_length=255, description="Opaque user identifier"),
]
