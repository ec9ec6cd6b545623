"""Fixed daily time slots and the weekday rules that decide which are offered."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .errors import UnknownSlotError


@dataclass(frozen=True)
class TimeSlot:
    id: str
    name: str
    starts_at: time
    label: str


TIME_SLOTS: tuple[TimeSlot, ...] = (
    TimeSlot(id="lunch", name="점심시간", starts_at=time(12, 40), label="12:40 - 13:30"),
    TimeSlot(id="cip1", name="CIP1", starts_at=time(16, 50), label="16:50 - 17:40"),
    TimeSlot(id="cip2", name="CIP2", starts_at=time(18, 30), label="18:30 - 20:00"),
    TimeSlot(id="cip3", name="CIP3", starts_at=time(20, 10), label="20:10 - 21:00"),
)

FRIDAY_SLOT_IDS = frozenset({"lunch"})

_SLOTS_BY_ID = {slot.id: slot for slot in TIME_SLOTS}


def get_slot(slot_id: str) -> TimeSlot:
    try:
        return _SLOTS_BY_ID[slot_id]
    except KeyError:
        raise UnknownSlotError(f"unknown time slot: {slot_id}") from None


def available_slots(weekday: int) -> tuple[TimeSlot, ...]:
    """
    Slots offered on a weekday (Monday == 0).
    Monday-Thursday offer every slot, Friday only lunch, weekends nothing.
    """
    if 0 <= weekday <= 3:
        return TIME_SLOTS
    if weekday == 4:
        return tuple(slot for slot in TIME_SLOTS if slot.id in FRIDAY_SLOT_IDS)
    return ()


def is_offered(day: date, slot_id: str) -> bool:
    return any(slot.id == slot_id for slot in available_slots(day.weekday()))


def is_past(day: date, slot: TimeSlot, now: datetime) -> bool:
    """True only for today's slots whose start time is at or before `now`."""
    if day != now.date():
        return False
    return slot.starts_at <= now.time()


def week_dates(today: date) -> list[date]:
    """Monday to Friday of the week containing `today`."""
    monday = today - timedelta(days=today.weekday())
    return [monday + timedelta(days=offset) for offset in range(5)]
