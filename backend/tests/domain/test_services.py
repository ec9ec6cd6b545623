from typing import Optional

import pytest
from room_booking.domain.errors import CapacityError, RestrictedRoomError, RoomDisabledError, TeamSizeError
from room_booking.domain.occupancy import UNLIMITED
from room_booking.domain.services import (
    DISABLED_FALLBACK_MESSAGE,
    RESTRICTED_MESSAGE,
    check,
    validate_booking,
)
from room_booking.models import Role, Room, Zone


def _room(
    *,
    capacity: Optional[int] = 30,
    min_team_size: int = 1,
    max_team_size: Optional[int] = None,
    enabled: bool = True,
    restricted_access: bool = False,
    disabled_reason: str = "",
) -> Room:
    return Room(
        id="fusion1",
        name="제1 융합실",
        zone=Zone.LEFT_WING,
        floor="2nd FLOOR",
        capacity=capacity,
        min_team_size=min_team_size,
        max_team_size=max_team_size,
        enabled=enabled,
        restricted_access=restricted_access,
        disabled_reason=disabled_reason,
        display_order=10,
    )


def test_admits_when_every_rule_passes() -> None:
    result = check(_room(), Role.STUDENT, 5, 25)
    assert result.admitted is True
    assert result.reason is None


def test_disabled_room_uses_configured_reason() -> None:
    result = check(_room(enabled=False, disabled_reason="공사 중"), Role.STUDENT, 2, 30)
    assert result.admitted is False
    assert result.rule == "disabled"
    assert result.reason == "공사 중"


def test_disabled_room_falls_back_to_generic_reason() -> None:
    with pytest.raises(RoomDisabledError) as excinfo:
        validate_booking(_room(enabled=False), Role.TEACHER, party_size=2, remaining=30)
    assert str(excinfo.value) == DISABLED_FALLBACK_MESSAGE


def test_restriction_message_wins_over_disabled() -> None:
    room = _room(enabled=False, restricted_access=True, disabled_reason="공사 중")
    result = check(room, Role.STUDENT, 2, 30)
    assert result.rule == "restricted"
    assert result.reason == RESTRICTED_MESSAGE


def test_restricted_room_is_open_to_privileged_roles() -> None:
    room = _room(restricted_access=True)
    assert check(room, Role.TEACHER, 10, 30).admitted is True
    assert check(room, Role.ADMIN, 10, 30).admitted is True


def test_disabled_is_reported_before_minimum_team_size() -> None:
    result = check(_room(enabled=False, min_team_size=4), Role.STUDENT, 1, 30)
    assert result.rule == "disabled"


def test_rejects_below_minimum_team_size() -> None:
    with pytest.raises(TeamSizeError) as excinfo:
        validate_booking(_room(min_team_size=3), Role.STUDENT, party_size=2, remaining=30)
    assert "3" in str(excinfo.value)


def test_rejects_above_maximum_team_size_even_with_room_to_spare() -> None:
    result = check(_room(max_team_size=6), Role.STUDENT, 7, 30)
    assert result.admitted is False
    assert result.rule == "team_size"
    assert "6" in (result.reason or "")


def test_rejects_over_remaining_capacity_naming_the_headcount() -> None:
    with pytest.raises(CapacityError) as excinfo:
        validate_booking(_room(), Role.STUDENT, party_size=20, remaining=10)
    assert excinfo.value.remaining == 10
    assert "10" in str(excinfo.value)


def test_party_equal_to_remaining_is_admitted() -> None:
    assert check(_room(), Role.STUDENT, 10, 10).admitted is True


def test_unlimited_capacity_never_rejects_on_size() -> None:
    assert check(_room(capacity=None), Role.STUDENT, 500, UNLIMITED).admitted is True


def test_restricted_check_raises_for_students() -> None:
    with pytest.raises(RestrictedRoomError):
        validate_booking(_room(restricted_access=True), Role.STUDENT, party_size=1, remaining=30)


def test_check_is_deterministic() -> None:
    room = _room(min_team_size=2, max_team_size=4)
    outcomes = {check(room, Role.STUDENT, 5, 30) for _ in range(3)}
    assert len(outcomes) == 1
