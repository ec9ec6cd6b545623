from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_requester, get_session
from ..domain.context import Requester
from ..domain.errors import StoreFailure, ValidationError
from ..domain.occupancy import format_remaining
from ..infrastructure.repositories import SqlAlchemyReservationStore, SqlAlchemyRoomDirectory
from ..schemas import DayAvailability, RemainingCapacityRead, RoomRead, SlotAvailability
from ..usecases import reservations as reservation_usecase
from ..usecases import rooms as room_usecase
from ..usecases import slots as slot_usecase
from ..utils.time import now_local

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=List[RoomRead])
async def list_rooms(session: AsyncSession = Depends(get_session)) -> list[RoomRead]:
    room_dir = SqlAlchemyRoomDirectory(session)
    try:
        rooms = await room_usecase.list_rooms(room_dir)
    except StoreFailure as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [RoomRead.from_db(room=room) for room in rooms]


@router.post("/seed", response_model=List[RoomRead])
async def seed_rooms(
    session: AsyncSession = Depends(get_session),
    requester: Requester = Depends(get_requester),
) -> list[RoomRead]:
    if not requester.is_privileged:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="privileged role required")
    room_dir = SqlAlchemyRoomDirectory(session)
    try:
        async with session.begin():
            rooms = await room_usecase.seed_rooms(room_dir)
    except StoreFailure as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [RoomRead.from_db(room=room) for room in rooms]


@router.get("/{room_id}", response_model=RoomRead)
async def get_room(room_id: str, session: AsyncSession = Depends(get_session)) -> RoomRead:
    room_dir = SqlAlchemyRoomDirectory(session)
    try:
        room = await reservation_usecase.load_room(room_dir, room_id)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.reason) from exc
    except StoreFailure as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return RoomRead.from_db(room=room)


@router.get("/{room_id}/availability", response_model=RemainingCapacityRead)
async def remaining_capacity(
    room_id: str,
    day: date = Query(..., alias="date", description="calendar day, YYYY-MM-DD"),
    slot_id: str = Query(...),
    session: AsyncSession = Depends(get_session),
) -> RemainingCapacityRead:
    room_dir = SqlAlchemyRoomDirectory(session)
    res_store = SqlAlchemyReservationStore(session)
    try:
        value = await reservation_usecase.remaining_capacity(
            room_dir,
            res_store,
            room_id=room_id,
            day=day,
            slot_id=slot_id,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.reason) from exc
    except StoreFailure as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return RemainingCapacityRead(room_id=room_id, date=day, slot_id=slot_id, remaining=format_remaining(value))


@router.get("/{room_id}/week", response_model=List[DayAvailability])
async def week_availability(
    room_id: str,
    session: AsyncSession = Depends(get_session),
) -> list[DayAvailability]:
    room_dir = SqlAlchemyRoomDirectory(session)
    res_store = SqlAlchemyReservationStore(session)
    now = now_local()
    try:
        days = await slot_usecase.week_availability(
            room_dir,
            res_store,
            room_id=room_id,
            today=now.date(),
            now=now,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.reason) from exc
    except StoreFailure as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [
        DayAvailability(
            date=entry["date"],
            fully_booked=entry["fully_booked"],
            slots=[
                SlotAvailability.from_entry(
                    slot=item["slot"],
                    used=item["used"],
                    remaining=item["remaining"],
                    past=item["past"],
                )
                for item in entry["slots"]
            ],
        )
        for entry in days
    ]
