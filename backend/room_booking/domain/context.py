from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..models import Role


@dataclass(frozen=True)
class Requester:
    """Who is acting; resolved at the edge and passed explicitly into every use case."""

    user_id: str
    name: str
    role: Role

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged


@dataclass(frozen=True)
class RosterEntry:
    member_id: str
    name: str

    def is_complete(self) -> bool:
        return bool(self.member_id.strip()) and bool(self.name.strip())

    def to_dict(self) -> dict[str, str]:
        return {"member_id": self.member_id.strip(), "name": self.name.strip()}


@dataclass(frozen=True)
class BookingRequest:
    room_id: str
    date: date
    slot_id: str
    purpose: str
    supervisor: str
    # ordinary requesters name companions; privileged requesters report a headcount
    additional_count: int = 0
    headcount: Optional[int] = None
    club: str = ""
    roster: tuple[RosterEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BookingOutcome:
    reservation_id: Optional[int] = None
    reason: Optional[str] = None
    kind: Optional[str] = None
    party_size: int = 0

    @property
    def ok(self) -> bool:
        return self.reservation_id is not None


@dataclass(frozen=True)
class CancelOutcome:
    cancelled: bool
    reason: Optional[str] = None
    kind: Optional[str] = None
    party_size: int = 0
    room_id: Optional[str] = None
    day: Optional[date] = None
    slot_id: Optional[str] = None
