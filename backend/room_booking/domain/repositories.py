from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..models import Reservation, Room
from .context import RosterEntry


class RoomDirectory(Protocol):
    async def list_rooms(self) -> Sequence[Room]: ...

    async def get_room(self, room_id: str) -> Room | None: ...

    async def lock_room(self, room_id: str) -> Room | None: ...

    async def upsert_room(self, room: Room) -> Room: ...


class ReservationStore(Protocol):
    async def query_by_slot(self, room_id: str, day: date, slot_id: str) -> Sequence[Reservation]: ...

    async def query_by_date_range(self, start: date, end: date) -> Sequence[Reservation]: ...

    async def list_by_requester(self, requester_id: str) -> Sequence[Reservation]: ...

    async def get(self, reservation_id: int) -> Reservation | None: ...

    async def create(self, reservation: Reservation) -> int: ...

    async def delete(self, reservation_id: int) -> None: ...

    async def save_roster(
        self,
        reservation_id: int,
        owner: RosterEntry,
        companions: Sequence[RosterEntry],
    ) -> None: ...
