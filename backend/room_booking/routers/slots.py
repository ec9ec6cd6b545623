from datetime import date
from typing import List

from fastapi import APIRouter, Query

from ..schemas import SlotRead
from ..usecases import slots as slot_usecase
from ..utils.time import now_local

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("", response_model=List[SlotRead])
async def list_slots(
    day: date = Query(..., alias="date", description="calendar day, YYYY-MM-DD"),
) -> list[SlotRead]:
    entries = slot_usecase.slots_for_day(day, now=now_local())
    return [SlotRead.from_slot(slot=entry["slot"], past=entry["past"]) for entry in entries]
