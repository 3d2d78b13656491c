"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from typing import TypeAlias

IsoDay: TypeAlias = str  # YYYY-MM-DD, UTC


def utc_now() -> datetime:
    return datetime.now(UTC)
