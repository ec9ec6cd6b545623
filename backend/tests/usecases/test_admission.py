import asyncio
from datetime import date

import pytest
from room_booking.usecases.admission import SlotAdmissionGate

DAY = date(2026, 10, 20)


@pytest.mark.asyncio
async def test_same_key_runs_one_at_a_time() -> None:
    gate = SlotAdmissionGate()
    order: list[str] = []

    async def worker(name: str) -> None:
        async with gate.hold("fusion1", DAY, "lunch"):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert order == ["a-in", "a-out", "b-in", "b-out"]
    assert gate.active_keys() == set()


@pytest.mark.asyncio
async def test_different_keys_do_not_block_each_other() -> None:
    gate = SlotAdmissionGate()
    order: list[str] = []

    async def worker(slot_id: str) -> None:
        async with gate.hold("fusion1", DAY, slot_id):
            order.append(f"{slot_id}-in")
            await asyncio.sleep(0)
            order.append(f"{slot_id}-out")

    await asyncio.gather(worker("lunch"), worker("cip1"))
    assert order[:2] == ["lunch-in", "cip1-in"]


@pytest.mark.asyncio
async def test_lock_released_when_body_raises() -> None:
    gate = SlotAdmissionGate()
    with pytest.raises(RuntimeError):
        async with gate.hold("fusion1", DAY, "lunch"):
            raise RuntimeError("boom")
    assert gate.active_keys() == set()


@pytest.mark.asyncio
async def test_disabled_gate_lets_requests_interleave() -> None:
    gate = SlotAdmissionGate(enabled=False)
    order: list[str] = []

    async def worker(name: str) -> None:
        async with gate.hold("fusion1", DAY, "lunch"):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert order[:2] == ["a-in", "b-in"]
