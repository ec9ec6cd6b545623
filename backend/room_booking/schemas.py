from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .domain.calendar import TimeSlot
from .domain.context import BookingRequest, RosterEntry
from .domain.occupancy import Remaining, format_remaining
from .models import Reservation, ReservationStatus, Room

Capacity = Union[int, str]


class RoomRead(BaseModel):
    room_id: str
    name: str
    zone: str
    floor: str
    capacity: Capacity
    min_team_size: int
    max_team_size: Optional[int]
    enabled: bool
    restricted_access: bool
    disabled_reason: str
    display_order: int
    note: Optional[str] = None

    @classmethod
    def from_db(cls, *, room: Room) -> "RoomRead":
        return cls(
            room_id=room.id,
            name=room.name,
            zone=str(room.zone),
            floor=room.floor or "",
            capacity=room.capacity if room.capacity is not None else "unlimited",
            min_team_size=room.min_team_size or 1,
            max_team_size=room.max_team_size,
            enabled=bool(room.enabled),
            restricted_access=bool(room.restricted_access),
            disabled_reason=room.disabled_reason or "",
            display_order=room.display_order or 0,
            note=room.note,
        )


class SlotRead(BaseModel):
    slot_id: str
    name: str
    time_range: str
    past: bool = False

    @classmethod
    def from_slot(cls, *, slot: TimeSlot, past: bool = False) -> "SlotRead":
        return cls(slot_id=slot.id, name=slot.name, time_range=slot.label, past=past)


class SlotAvailability(SlotRead):
    used: int
    remaining: Capacity

    @classmethod
    def from_entry(cls, *, slot: TimeSlot, used: int, remaining: Remaining, past: bool) -> "SlotAvailability":
        return cls(
            slot_id=slot.id,
            name=slot.name,
            time_range=slot.label,
            past=past,
            used=used,
            remaining=format_remaining(remaining),
        )


class DayAvailability(BaseModel):
    date: date
    fully_booked: bool
    slots: List[SlotAvailability]


class RemainingCapacityRead(BaseModel):
    room_id: str
    date: date
    slot_id: str
    remaining: Capacity


class RosterEntryIn(BaseModel):
    member_id: str = Field(default="", max_length=64)
    name: str = Field(default="", max_length=255)


class ReservationCreate(BaseModel):
    room_id: str
    date: date
    slot_id: str
    purpose: str = ""
    supervisor: str = ""
    club: str = ""
    additional_count: int = Field(default=0, ge=0)
    headcount: Optional[int] = Field(default=None, ge=1)
    participants: List[RosterEntryIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _trim(self) -> "ReservationCreate":
        self.room_id = self.room_id.strip()
        self.slot_id = self.slot_id.strip()
        return self

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            room_id=self.room_id,
            date=self.date,
            slot_id=self.slot_id,
            purpose=self.purpose,
            supervisor=self.supervisor,
            additional_count=self.additional_count,
            headcount=self.headcount,
            club=self.club,
            roster=tuple(RosterEntry(member_id=p.member_id, name=p.name) for p in self.participants),
        )


class ReservationCreated(BaseModel):
    reservation_id: int


class ParticipantRead(BaseModel):
    member_id: str
    name: str


class ReservationRead(BaseModel):
    reservation_id: int
    requester_id: str
    requester_name: str
    room_id: str
    room_name: str
    zone: str
    floor: str
    date: date
    slot_id: str
    time_range: str
    party_size: int
    participants: List[ParticipantRead]
    purpose: str
    supervisor: str
    club: str
    status: ReservationStatus
    created_at: datetime

    @classmethod
    def from_db(cls, *, reservation: Reservation) -> "ReservationRead":
        return cls(
            reservation_id=reservation.id,
            requester_id=reservation.requester_id,
            requester_name=reservation.requester_name,
            room_id=reservation.room_id,
            room_name=reservation.room_name,
            zone=reservation.zone,
            floor=reservation.floor or "",
            date=reservation.date,
            slot_id=reservation.slot_id,
            time_range=reservation.time_range,
            party_size=reservation.party_size,
            participants=[ParticipantRead(**p) for p in (reservation.participants or [])],
            purpose=reservation.purpose,
            supervisor=reservation.supervisor,
            club=reservation.club or "",
            status=reservation.status,
            created_at=reservation.created_at,
        )


class CancelResult(BaseModel):
    reservation_id: int
    cancelled: bool
