import logging
from typing import List, Sequence

from ..catalog import ROOM_CATALOG
from ..domain.occupancy import parse_capacity
from ..domain.repositories import RoomDirectory
from ..domain.services import DISABLED_FALLBACK_MESSAGE, RESTRICTED_MESSAGE
from ..models import Room, Zone

logger = logging.getLogger(__name__)

_ZONE_ORDER = {zone: index for index, zone in enumerate(Zone)}


def derive_disabled_reason(*, enabled: bool, restricted_access: bool, given: str = "") -> str:
    """Restricted rooms always show the restriction text; disabled rooms fall back to a generic one."""
    if restricted_access:
        return RESTRICTED_MESSAGE
    if not enabled and not given:
        return DISABLED_FALLBACK_MESSAGE
    return given


def _sort_key(room: Room) -> tuple[int, str, int, str]:
    return (_ZONE_ORDER.get(room.zone, len(_ZONE_ORDER)), room.floor or "", room.display_order or 0, room.name)


async def list_rooms(room_dir: RoomDirectory) -> List[Room]:
    rooms: Sequence[Room] = await room_dir.list_rooms()
    return sorted(rooms, key=_sort_key)


def catalog_rooms() -> List[Room]:
    rooms: List[Room] = []
    for zone, floors in ROOM_CATALOG.items():
        for floor, entries in floors:
            for index, entry in enumerate(entries):
                enabled = not entry.get("disabled", False)
                restricted = bool(entry.get("restricted", False))
                rooms.append(
                    Room(
                        id=entry["id"],
                        name=entry["name"],
                        zone=zone,
                        floor=floor,
                        capacity=parse_capacity(entry.get("capacity")),
                        min_team_size=entry.get("min_team_size", 1),
                        max_team_size=entry.get("max_team_size"),
                        enabled=enabled,
                        restricted_access=restricted,
                        disabled_reason=derive_disabled_reason(enabled=enabled, restricted_access=restricted),
                        # spaced by ten so rooms can be inserted between existing ones
                        display_order=(index + 1) * 10,
                        note=entry.get("note"),
                    )
                )
    return rooms


async def seed_rooms(room_dir: RoomDirectory) -> List[Room]:
    seeded: List[Room] = []
    for room in catalog_rooms():
        seeded.append(await room_dir.upsert_room(room))
        logger.info("seeded room %s / %s / %s", room.zone, room.floor, room.id)
    return seeded
