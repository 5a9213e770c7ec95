from __future__ import annotations

import re
from enum import Enum

from app.errors import DomainValidationError

_DIGITS = re.compile(r"(\d+)")


class RoomStatus(str, Enum):
    FREE = "Free"
    RENTED = "Rented"


def room_number_sort_key(room_number: str) -> tuple:
    """Numeric-aware ordering key, so "R2" sorts before "R10"."""
    parts = []
    for chunk in _DIGITS.split(room_number):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk.casefold()))
    # Original string breaks ties such as "R01" vs "R1"
    return (tuple(parts), room_number)


def generate_room_numbers(count: int, prefix: str = "R", start_from: int = 1) -> list[str]:
    """Room numbers ``prefix{start_from}`` .. ``prefix{start_from + count - 1}``."""
    if count < 1:
        raise DomainValidationError("count must be at least 1")
    return [f"{prefix}{start_from + i}" for i in range(count)]
