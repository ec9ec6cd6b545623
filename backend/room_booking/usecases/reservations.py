from __future__ import annotations

import logging
from collections import Counter
from contextlib import nullcontext
from datetime import date, datetime, time
from typing import Any, AsyncContextManager, Callable, Sequence

from ..domain.calendar import get_slot, is_offered, is_past
from ..domain.context import BookingOutcome, BookingRequest, CancelOutcome, Requester, RosterEntry
from ..domain.errors import (
    BookingError,
    CancelNotAllowedError,
    EligibilityRejection,
    ReservationNotFoundError,
    RoomNotFoundError,
    ValidationError,
)
from ..domain.occupancy import Remaining, remaining, used_capacity
from ..domain.repositories import ReservationStore, RoomDirectory
from ..domain.services import check, ensure_accessible
from ..models import Reservation, ReservationStatus, Room
from ..utils.time import utc_naive_now
from .admission import SlotAdmissionGate

logger = logging.getLogger(__name__)


Transaction = Callable[[], AsyncContextManager[Any]]


async def submit_reservation(
    room_dir: RoomDirectory,
    res_store: ReservationStore,
    gate: SlotAdmissionGate,
    *,
    requester: Requester,
    request: BookingRequest,
    now: datetime,
    transaction: Transaction | None = None,
) -> BookingOutcome:
    """
    Validate a booking request against the current occupancy and commit it.
    `transaction` opens the unit of work (the router passes `session.begin`); it is
    entered and committed while the slot gate is held, so the next request for the
    same slot reads the committed row. Expected rejections come back as a
    BookingOutcome; StoreFailure propagates.
    """
    try:
        reservation_id, party_size = await _submit(
            room_dir,
            res_store,
            gate,
            requester=requester,
            request=request,
            now=now,
            transaction=transaction or nullcontext,
        )
    except BookingError as exc:
        logger.info(
            "booking rejected room=%s date=%s slot=%s requester=%s kind=%s reason=%s",
            request.room_id,
            request.date,
            request.slot_id,
            requester.user_id,
            exc.kind,
            exc.reason,
        )
        return BookingOutcome(reason=exc.reason, kind=exc.kind)
    return BookingOutcome(reservation_id=reservation_id, party_size=party_size)


async def _submit(
    room_dir: RoomDirectory,
    res_store: ReservationStore,
    gate: SlotAdmissionGate,
    *,
    requester: Requester,
    request: BookingRequest,
    now: datetime,
    transaction: Transaction,
) -> tuple[int, int]:
    purpose = request.purpose.strip()
    supervisor = request.supervisor.strip()
    if not purpose:
        raise ValidationError("이용 사유를 입력해주세요.")
    if not supervisor:
        raise ValidationError("지도 교사 이름을 입력해주세요.")

    async with gate.hold(request.room_id, request.date, request.slot_id):
        async with transaction():
            # The locking read comes first so the occupancy read below sees every
            # booking committed before the lock was granted.
            room = await room_dir.lock_room(request.room_id)
            if room is None:
                raise RoomNotFoundError(f"존재하지 않는 장소입니다: {request.room_id}")
            ensure_accessible(room, requester.role)

            slot = get_slot(request.slot_id)
            if not is_offered(request.date, slot.id):
                raise ValidationError("선택한 날짜에는 해당 시간대를 예약할 수 없습니다.")
            if not requester.is_privileged:
                if request.date < now.date():
                    raise ValidationError("지난 날짜는 예약할 수 없습니다.")
                if is_past(request.date, slot, now):
                    raise ValidationError("현재 시간보다 이전 시간은 예약할 수 없습니다.")

            party_size = _party_size(requester, request)

            # Fresh reads under the lock; never reuse a cached weekly view here.
            current = await res_store.query_by_slot(room.id, request.date, slot.id)
            used = used_capacity(room.id, request.date, slot.id, current)

            eligibility = check(room, requester.role, party_size, remaining(room, used))
            if not eligibility.admitted:
                raise EligibilityRejection(eligibility.reason or "")

            companions: tuple[RosterEntry, ...] = ()
            if not requester.is_privileged:
                companions = _validated_roster(request)

            reservation = Reservation(
                requester_id=requester.user_id,
                requester_name=requester.name,
                room_id=room.id,
                room_name=room.name,
                zone=str(room.zone),
                floor=room.floor or "",
                date=request.date,
                slot_id=slot.id,
                time_range=slot.label,
                party_size=party_size,
                participants=[entry.to_dict() for entry in companions],
                purpose=purpose,
                supervisor=supervisor,
                club=request.club.strip(),
                status=ReservationStatus.ACTIVE,
                created_at=utc_naive_now(),
            )
            reservation_id = await res_store.create(reservation)
            owner = RosterEntry(member_id=requester.user_id, name=requester.name)
            await res_store.save_roster(reservation_id, owner, companions)

    logger.info(
        "booking admitted id=%s room=%s date=%s slot=%s party_size=%s used_before=%s",
        reservation_id,
        room.id,
        request.date,
        slot.id,
        party_size,
        used,
    )
    return reservation_id, party_size


def _party_size(requester: Requester, request: BookingRequest) -> int:
    if requester.is_privileged:
        if request.headcount is None or request.headcount < 1:
            raise ValidationError("이용 학생 수를 1명 이상 입력해주세요.")
        return request.headcount
    if request.additional_count < 0:
        raise ValidationError("동행 인원은 0명 이상이어야 합니다.")
    return 1 + request.additional_count


def _validated_roster(request: BookingRequest) -> tuple[RosterEntry, ...]:
    roster = tuple(request.roster)
    if len(roster) != request.additional_count:
        raise ValidationError(
            f"동행자 {request.additional_count}명의 학번과 이름을 모두 입력해주세요."
        )
    if not all(entry.is_complete() for entry in roster):
        raise ValidationError("동행자의 학번과 이름을 모두 입력해주세요.")

    counts = Counter((entry.member_id.strip(), entry.name.strip()) for entry in roster)
    duplicates = [pair for pair, count in counts.items() if count > 1]
    if duplicates:
        # Advisory only: duplicates are reported, never rejected.
        logger.warning("duplicate roster entries room=%s entries=%s", request.room_id, duplicates)
    return roster


async def cancel_reservation(
    res_store: ReservationStore,
    *,
    reservation_id: int,
    requester: Requester,
    now: datetime,
    cutoff: time,
) -> CancelOutcome:
    """
    Delete a reservation together with its roster projection.
    Ordinary requesters may cancel only their own booking and only strictly before
    `cutoff` on the reservation's date; privileged roles bypass both checks.
    """
    try:
        reservation = await res_store.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError("예약을 찾을 수 없습니다.")
        if not requester.is_privileged:
            if reservation.requester_id != requester.user_id:
                raise CancelNotAllowedError("본인의 예약만 취소할 수 있습니다.")
            if not _before_cutoff(reservation.date, now, cutoff):
                raise CancelNotAllowedError(
                    f"{cutoff.strftime('%H:%M')} 이후에는 관리자에게 문의해주세요."
                )
    except BookingError as exc:
        return CancelOutcome(cancelled=False, reason=exc.reason, kind=exc.kind)

    await res_store.delete(reservation_id)
    logger.info(
        "reservation cancelled id=%s room=%s date=%s slot=%s by=%s",
        reservation_id,
        reservation.room_id,
        reservation.date,
        reservation.slot_id,
        requester.user_id,
    )
    return CancelOutcome(
        cancelled=True,
        party_size=reservation.party_size,
        room_id=reservation.room_id,
        day=reservation.date,
        slot_id=reservation.slot_id,
    )


def _before_cutoff(day: date, now: datetime, cutoff: time) -> bool:
    return now < datetime.combine(day, cutoff, tzinfo=now.tzinfo)


async def remaining_capacity(
    room_dir: RoomDirectory,
    res_store: ReservationStore,
    *,
    room_id: str,
    day: date,
    slot_id: str,
) -> Remaining:
    room = await load_room(room_dir, room_id)
    slot = get_slot(slot_id)
    current = await res_store.query_by_slot(room.id, day, slot.id)
    return remaining(room, used_capacity(room.id, day, slot.id, current))


async def list_user_reservations(
    res_store: ReservationStore,
    *,
    requester: Requester,
) -> Sequence[Reservation]:
    return await res_store.list_by_requester(requester.user_id)



async def load_room(room_dir: RoomDirectory, room_id: str) -> Room:
    room = await room_dir.get_room(room_id)
    if room is None:
        raise RoomNotFoundError(f"존재하지 않는 장소입니다: {room_id}")
    return room
