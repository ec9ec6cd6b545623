from __future__ import annotations

import functools
import logging
from datetime import date
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.context import RosterEntry
from ..domain.errors import StoreFailure
from ..domain.repositories import ReservationStore, RoomDirectory
from ..models import MemberRole, Reservation, ReservationMember, ReservationStatus, Room
from ..utils.time import utc_naive_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _store_call(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("store call %s failed", func.__qualname__)
            raise StoreFailure() from exc

    return wrapper


class SqlAlchemyRoomDirectory(RoomDirectory):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @_store_call
    async def list_rooms(self) -> List[Room]:
        result = await self.session.scalars(select(Room))
        return list(result.all())

    @_store_call
    async def get_room(self, room_id: str) -> Room | None:
        return await self.session.get(Room, room_id)

    @_store_call
    async def lock_room(self, room_id: str) -> Room | None:
        # Row lock on the room serializes admission across processes for the transaction.
        result = await self.session.scalar(
            select(Room).where(Room.id == room_id).with_for_update().execution_options(populate_existing=True)
        )
        return result if isinstance(result, Room) else None

    @_store_call
    async def upsert_room(self, room: Room) -> Room:
        merged = await self.session.merge(room)
        await self.session.flush()
        return merged


class SqlAlchemyReservationStore(ReservationStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _active(self) -> Select[tuple[Reservation]]:
        return select(Reservation).where(Reservation.status == ReservationStatus.ACTIVE)

    @_store_call
    async def query_by_slot(self, room_id: str, day: date, slot_id: str) -> List[Reservation]:
        stmt = self._active().where(
            Reservation.room_id == room_id,
            Reservation.date == day,
            Reservation.slot_id == slot_id,
        )
        result = await self.session.scalars(stmt)
        return list(result.all())

    @_store_call
    async def query_by_date_range(self, start: date, end: date) -> List[Reservation]:
        stmt = (
            self._active()
            .where(Reservation.date >= start, Reservation.date <= end)
            .order_by(Reservation.date, Reservation.slot_id)
        )
        result = await self.session.scalars(stmt)
        return list(result.all())

    @_store_call
    async def list_by_requester(self, requester_id: str) -> List[Reservation]:
        stmt = (
            self._active()
            .where(Reservation.requester_id == requester_id)
            .order_by(Reservation.created_at.desc())
        )
        result = await self.session.scalars(stmt)
        return list(result.all())

    @_store_call
    async def get(self, reservation_id: int) -> Optional[Reservation]:
        return await self.session.get(Reservation, reservation_id)

    @_store_call
    async def create(self, reservation: Reservation) -> int:
        self.session.add(reservation)
        await self.session.flush()
        return reservation.id

    @_store_call
    async def delete(self, reservation_id: int) -> None:
        await self.session.execute(
            delete(ReservationMember).where(ReservationMember.reservation_id == reservation_id)
        )
        await self.session.execute(delete(Reservation).where(Reservation.id == reservation_id))
        await self.session.flush()

    @_store_call
    async def save_roster(
        self,
        reservation_id: int,
        owner: RosterEntry,
        companions: Sequence[RosterEntry],
    ) -> None:
        now = utc_naive_now()
        members = [(owner, MemberRole.OWNER)] + [(entry, MemberRole.MEMBER) for entry in companions]
        for entry, role in members:
            self.session.add(
                ReservationMember(
                    reservation_id=reservation_id,
                    member_id=entry.member_id.strip(),
                    name=entry.name.strip(),
                    role=role,
                    created_at=now,
                )
            )
        await self.session.flush()
