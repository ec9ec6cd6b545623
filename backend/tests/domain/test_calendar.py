from datetime import date, datetime

import pytest
from room_booking.domain.calendar import (
    TIME_SLOTS,
    available_slots,
    get_slot,
    is_offered,
    is_past,
    week_dates,
)
from room_booking.domain.errors import UnknownSlotError


@pytest.mark.parametrize("weekday", [0, 1, 2, 3])
def test_monday_to_thursday_offer_every_slot_in_order(weekday: int) -> None:
    slots = available_slots(weekday)
    assert [slot.id for slot in slots] == ["lunch", "cip1", "cip2", "cip3"]


def test_friday_offers_only_lunch() -> None:
    assert [slot.id for slot in available_slots(4)] == ["lunch"]


@pytest.mark.parametrize("weekday", [5, 6])
def test_weekend_offers_nothing(weekday: int) -> None:
    assert available_slots(weekday) == ()


def test_is_offered_uses_the_date_weekday() -> None:
    friday = date(2026, 10, 23)
    assert is_offered(friday, "lunch")
    assert not is_offered(friday, "cip2")
    assert not is_offered(date(2026, 10, 24), "lunch")


def test_is_past_for_today_at_and_after_start() -> None:
    lunch = get_slot("lunch")
    today = date(2026, 10, 19)
    assert is_past(today, lunch, datetime(2026, 10, 19, 12, 40)) is True
    assert is_past(today, lunch, datetime(2026, 10, 19, 15, 0)) is True
    assert is_past(today, lunch, datetime(2026, 10, 19, 12, 39)) is False


def test_is_past_never_applies_to_other_dates() -> None:
    cip3 = get_slot("cip3")
    now = datetime(2026, 10, 19, 23, 0)
    assert is_past(date(2026, 10, 20), cip3, now) is False
    # earlier days are rejected by date selection, not by this predicate
    assert is_past(date(2026, 10, 18), cip3, now) is False


def test_get_slot_rejects_unknown_id() -> None:
    with pytest.raises(UnknownSlotError):
        get_slot("breakfast")


def test_week_dates_run_monday_to_friday() -> None:
    dates = week_dates(date(2026, 10, 22))
    assert dates[0] == date(2026, 10, 19)
    assert dates[-1] == date(2026, 10, 23)
    assert len(dates) == 5


def test_slot_labels_are_fixed() -> None:
    assert {slot.id: slot.label for slot in TIME_SLOTS}["cip2"] == "18:30 - 20:00"
