from datetime import date, datetime
from typing import List, Optional

import pytest
from room_booking.domain.errors import RoomNotFoundError
from room_booking.domain.occupancy import UNLIMITED
from room_booking.models import Reservation, ReservationStatus, Room, Zone
from room_booking.usecases import slots as uc

MONDAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 13, 0)


class FakeRoomDirectory:
    def __init__(self, room: Room) -> None:
        self.room = room

    async def get_room(self, room_id: str) -> Optional[Room]:
        return self.room if room_id == self.room.id else None


class FakeRangeStore:
    def __init__(self, reservations: List[Reservation]) -> None:
        self.reservations = reservations
        self.calls: List[tuple[date, date]] = []

    async def query_by_date_range(self, start: date, end: date) -> List[Reservation]:
        self.calls.append((start, end))
        return [res for res in self.reservations if start <= res.date <= end]


def _room(capacity: Optional[int]) -> Room:
    return Room(id="group1", name="제1 그룹실", zone=Zone.RIGHT_WING, floor="STUDY cafe", capacity=capacity)


def _res(day: date, slot_id: str, party_size: int, status: ReservationStatus = ReservationStatus.ACTIVE) -> Reservation:
    return Reservation(room_id="group1", date=day, slot_id=slot_id, party_size=party_size, status=status)


def test_slots_for_day_flags_past_slots_today() -> None:
    entries = uc.slots_for_day(MONDAY, now=NOW)
    assert [(e["slot"].id, e["past"]) for e in entries] == [
        ("lunch", True),
        ("cip1", False),
        ("cip2", False),
        ("cip3", False),
    ]


def test_slots_for_weekend_is_empty() -> None:
    assert uc.slots_for_day(date(2026, 10, 24), now=NOW) == []


@pytest.mark.asyncio
async def test_week_availability_uses_one_range_read() -> None:
    friday = date(2026, 10, 23)
    store = FakeRangeStore(
        [
            _res(MONDAY, "cip1", 4),
            _res(MONDAY, "cip1", 1, ReservationStatus.CANCELLED),
            _res(friday, "lunch", 6),
        ]
    )
    days = await uc.week_availability(
        FakeRoomDirectory(_room(6)),
        store,
        room_id="group1",
        today=date(2026, 10, 21),
        now=NOW,
    )

    assert store.calls == [(MONDAY, friday)]
    assert [d["date"] for d in days] == [date(2026, 10, 19 + i) for i in range(5)]

    monday_cip1 = next(s for s in days[0]["slots"] if s["slot"].id == "cip1")
    assert monday_cip1["used"] == 4
    assert monday_cip1["remaining"] == 2
    assert days[0]["fully_booked"] is False

    assert [s["slot"].id for s in days[4]["slots"]] == ["lunch"]
    assert days[4]["fully_booked"] is True


@pytest.mark.asyncio
async def test_week_availability_for_unlimited_room_is_never_full() -> None:
    days = await uc.week_availability(
        FakeRoomDirectory(_room(None)),
        FakeRangeStore([_res(MONDAY, "lunch", 80)]),
        room_id="group1",
        today=MONDAY,
        now=NOW,
    )
    assert days[0]["slots"][0]["remaining"] is UNLIMITED
    assert not any(d["fully_booked"] for d in days)


@pytest.mark.asyncio
async def test_week_availability_unknown_room() -> None:
    with pytest.raises(RoomNotFoundError):
        await uc.week_availability(
            FakeRoomDirectory(_room(6)),
            FakeRangeStore([]),
            room_id="missing",
            today=MONDAY,
            now=NOW,
        )
