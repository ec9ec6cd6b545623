from datetime import date, datetime
from typing import Any, Dict, List

from ..domain.calendar import available_slots, is_past, week_dates
from ..domain.occupancy import UNLIMITED, remaining, used_capacity
from ..domain.repositories import ReservationStore, RoomDirectory
from .reservations import load_room


def slots_for_day(day: date, *, now: datetime) -> List[Dict[str, Any]]:
    return [{"slot": slot, "past": is_past(day, slot, now)} for slot in available_slots(day.weekday())]


async def week_availability(
    room_dir: RoomDirectory,
    res_store: ReservationStore,
    *,
    room_id: str,
    today: date,
    now: datetime,
) -> List[Dict[str, Any]]:
    """
    Display grid for the selectable week: every offered slot with used and remaining
    headcount, built from a single range read. Not used for admission decisions.
    """
    room = await load_room(room_dir, room_id)
    dates = week_dates(today)
    reservations = await res_store.query_by_date_range(dates[0], dates[-1])

    days: List[Dict[str, Any]] = []
    for day in dates:
        entries: List[Dict[str, Any]] = []
        for slot in available_slots(day.weekday()):
            used = used_capacity(room.id, day, slot.id, reservations)
            entries.append(
                {
                    "slot": slot,
                    "used": used,
                    "remaining": remaining(room, used),
                    "past": is_past(day, slot, now),
                }
            )
        fully_booked = bool(entries) and all(
            entry["remaining"] is not UNLIMITED and entry["remaining"] == 0 for entry in entries
        )
        days.append({"date": day, "slots": entries, "fully_booked": fully_booked})
    return days
