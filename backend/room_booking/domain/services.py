from dataclasses import dataclass
from typing import Optional

from ..models import Role, Room
from .errors import (
    CapacityError,
    EligibilityRejection,
    RestrictedRoomError,
    RoomDisabledError,
    TeamSizeError,
)
from .occupancy import UNLIMITED, Remaining

RESTRICTED_MESSAGE = "*교사만 신청 가능합니다."
DISABLED_FALLBACK_MESSAGE = "*신청 불가능한 교실입니다."


@dataclass(frozen=True)
class Eligibility:
    admitted: bool
    reason: Optional[str] = None
    rule: Optional[str] = None

    @classmethod
    def admit(cls) -> "Eligibility":
        return cls(admitted=True)

    @classmethod
    def reject(cls, error: EligibilityRejection) -> "Eligibility":
        return cls(admitted=False, reason=error.reason, rule=error.rule)


def ensure_accessible(room: Room, role: Role) -> None:
    if room.restricted_access and not role.is_privileged:
        raise RestrictedRoomError(RESTRICTED_MESSAGE)


def validate_booking(room: Room, role: Role, *, party_size: int, remaining: Remaining) -> None:
    """
    Pure validation of a proposed booking against room policy and current occupancy.
    Rules are checked in order and the first failure is raised:
    restricted access, disabled room, minimum team size, maximum team size, capacity.
    """
    ensure_accessible(room, role)
    if not room.enabled:
        raise RoomDisabledError(room.disabled_reason or DISABLED_FALLBACK_MESSAGE)

    min_team_size = room.min_team_size or 1
    if party_size < min_team_size:
        raise TeamSizeError(f"이 장소는 최소 {min_team_size}명 이상 신청해야 합니다.")
    if room.max_team_size is not None and party_size > room.max_team_size:
        raise TeamSizeError(f"이 장소는 최대 {room.max_team_size}명까지 신청할 수 있습니다.")

    if remaining is not UNLIMITED and party_size > remaining:
        raise CapacityError(
            f"남은 수용 인원은 {remaining}명입니다.",
            remaining=remaining,
        )


def check(room: Room, role: Role, party_size: int, remaining: Remaining) -> Eligibility:
    try:
        validate_booking(room, role, party_size=party_size, remaining=remaining)
    except EligibilityRejection as exc:
        return Eligibility.reject(exc)
    return Eligibility.admit()
