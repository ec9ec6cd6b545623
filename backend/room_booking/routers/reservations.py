import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..deps import get_admission_gate, get_app_settings, get_requester, get_session
from ..domain.context import Requester
from ..domain.errors import StoreFailure
from ..infrastructure.repositories import SqlAlchemyReservationStore, SqlAlchemyRoomDirectory
from ..schemas import CancelResult, ReservationCreate, ReservationCreated, ReservationRead
from ..usecases import reservations as reservation_usecase
from ..usecases.admission import SlotAdmissionGate
from ..utils.audit_log import emit_audit_log
from ..utils.time import now_local

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["reservations"])

_REJECTION_STATUS = {
    "validation": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "eligibility": status.HTTP_409_CONFLICT,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
}


def _store_unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(StoreFailure()))


@router.post("/reservations", response_model=ReservationCreated, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationCreate,
    session: AsyncSession = Depends(get_session),
    requester: Requester = Depends(get_requester),
    gate: SlotAdmissionGate = Depends(get_admission_gate),
) -> ReservationCreated:
    room_dir = SqlAlchemyRoomDirectory(session)
    res_store = SqlAlchemyReservationStore(session)
    request = payload.to_request()
    try:
        outcome = await reservation_usecase.submit_reservation(
            room_dir,
            res_store,
            gate,
            requester=requester,
            request=request,
            now=now_local(),
            transaction=session.begin,
        )
    except (StoreFailure, SQLAlchemyError) as exc:
        raise _store_unavailable() from exc

    reservation_id = outcome.reservation_id
    if reservation_id is None:
        status_code = _REJECTION_STATUS.get(outcome.kind or "", status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=status_code, detail=outcome.reason)

    try:
        emit_audit_log(
            action="reservation.created",
            actor_id=requester.user_id,
            actor_role=requester.role,
            reservation_id=reservation_id,
            room_id=request.room_id,
            day=request.date,
            slot_id=request.slot_id,
            party_size=outcome.party_size,
        )
    except RuntimeError:
        logger.exception("audit log failed for reservation %s", reservation_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed")

    return ReservationCreated(reservation_id=reservation_id)


@router.get("/me/reservations", response_model=List[ReservationRead])
async def list_my_reservations(
    session: AsyncSession = Depends(get_session),
    requester: Requester = Depends(get_requester),
) -> list[ReservationRead]:
    res_store = SqlAlchemyReservationStore(session)
    try:
        rows = await reservation_usecase.list_user_reservations(res_store, requester=requester)
    except StoreFailure as exc:
        raise _store_unavailable() from exc
    return [ReservationRead.from_db(reservation=res) for res in rows]


@router.post("/reservations/{reservation_id}/cancel", response_model=CancelResult)
async def cancel_reservation(
    reservation_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
    requester: Requester = Depends(get_requester),
    settings: Settings = Depends(get_app_settings),
) -> CancelResult:
    res_store = SqlAlchemyReservationStore(session)
    try:
        async with session.begin():
            outcome = await reservation_usecase.cancel_reservation(
                res_store,
                reservation_id=reservation_id,
                requester=requester,
                now=now_local(),
                cutoff=settings.cancel_cutoff,
            )
    except (StoreFailure, SQLAlchemyError) as exc:
        raise _store_unavailable() from exc

    if not outcome.cancelled:
        status_code = _REJECTION_STATUS.get(outcome.kind or "", status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=status_code, detail=outcome.reason)

    try:
        emit_audit_log(
            action="reservation.cancelled",
            actor_id=requester.user_id,
            actor_role=requester.role,
            reservation_id=reservation_id,
            room_id=outcome.room_id,
            day=outcome.day,
            slot_id=outcome.slot_id,
            party_size=outcome.party_size,
        )
    except RuntimeError:
        logger.exception("audit log failed for cancellation %s", reservation_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed")

    return CancelResult(reservation_id=reservation_id, cancelled=True)
