"""Keyset pagination: response envelope and cursor codec."""

import base64
import binascii
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import Field

from src.matchboard.schemas.base import APIModel

T = TypeVar("T")

_SEPARATOR = "|"


class PaginatedResponse(APIModel, Generic[T]):
    """One page of a newest-first listing.

    Pass ``nextCursor`` back unchanged to fetch the following page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(created_at: datetime, row_id: UUID) -> str:
    """Position just after the row with this (created_at, id)."""
    raw = f"{created_at.isoformat()}{_SEPARATOR}{row_id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Inverse of ``encode_cursor``.

    Raises:
        ValueError: the cursor was not produced by ``encode_cursor``
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        created_at, row_id = raw.split(_SEPARATOR)
        return datetime.fromisoformat(created_at), UUID(row_id)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ValueError("Invalid cursor") from e
