from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Any, Iterable, Literal, Optional, Union

from ..models import ReservationStatus, Room


class _Unlimited(Enum):
    UNLIMITED = "unlimited"

    def __repr__(self) -> str:
        return "UNLIMITED"


UNLIMITED: Literal[_Unlimited.UNLIMITED] = _Unlimited.UNLIMITED

Remaining = Union[int, Literal[_Unlimited.UNLIMITED]]

_DIGITS = re.compile(r"\d+")


def _party_size_of(reservation: Any) -> int:
    # Legacy rows may carry an unusable party size; such rows count as one.
    value = getattr(reservation, "party_size", None)
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return max(value, 1)
    try:
        return max(int(str(value).strip()), 1)
    except (TypeError, ValueError):
        return 1


def _is_active(reservation: Any) -> bool:
    status = getattr(reservation, "status", None)
    return status == ReservationStatus.ACTIVE or status == ReservationStatus.ACTIVE.value


def used_capacity(room_id: str, day: date, slot_id: str, reservations: Iterable[Any]) -> int:
    """Sum the party sizes of active reservations for one (room, date, slot)."""
    return sum(
        _party_size_of(res)
        for res in reservations
        if res.room_id == room_id and res.date == day and res.slot_id == slot_id and _is_active(res)
    )


def remaining(room: Room, used: int) -> Remaining:
    if room.capacity is None:
        return UNLIMITED
    return max(0, room.capacity - used)


def parse_capacity(text: Optional[str]) -> Optional[int]:
    """
    Convert directory capacity text into a headcount.
    "20인" and "30" yield integers; blank or free text such as "선착순 배정" means unlimited.
    """
    if text is None:
        return None
    match = _DIGITS.search(str(text))
    if match is None:
        return None
    return int(match.group())


def format_remaining(value: Remaining) -> int | str:
    return value.value if value is UNLIMITED else value
