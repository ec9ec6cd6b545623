import json
from datetime import date
from typing import Any, List

import pytest
from room_booking.models import Role
from room_booking.utils import audit_log
from room_booking.utils.request_id import set_request_id


def test_emit_audit_log_outputs_json(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    set_request_id("req-123")
    audit_log.emit_audit_log(
        action="reservation.created",
        actor_id="20301",
        actor_role=Role.STUDENT,
        reservation_id=1,
        room_id="fusion1",
        day=date(2026, 10, 20),
        slot_id="lunch",
        party_size=3,
    )
    set_request_id(None)

    assert len(messages) == 1
    payload = json.loads(messages[0])
    assert payload["action"] == "reservation.created"
    assert payload["actor_role"] == "student"
    assert payload["request_id"] == "req-123"
    assert payload["date"] == "2026-10-20"
    assert payload["party_size"] == 3
    assert "timestamp" in payload
    assert set(payload) == {
        "timestamp",
        "action",
        "request_id",
        "actor_id",
        "actor_role",
        "reservation_id",
        "room_id",
        "date",
        "slot_id",
        "party_size",
    }


def test_emit_audit_log_drops_empty_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())
    audit_log.emit_audit_log(
        action="reservation.cancelled",
        actor_id="t-01",
        actor_role=Role.TEACHER,
        reservation_id=7,
        room_id=None,
        day=None,
        slot_id=None,
        party_size=None,
    )
    payload = json.loads(messages[0])
    assert "room_id" not in payload
    assert "date" not in payload


def test_emit_audit_log_raises_on_logger_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    class DummyLogger:
        def info(self, _: Any) -> None:
            raise ValueError("fail")

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    with pytest.raises(RuntimeError):
        audit_log.emit_audit_log(
            action="reservation.cancelled",
            actor_id="20301",
            actor_role=Role.STUDENT,
            reservation_id=1,
            room_id="fusion1",
            day=date(2026, 10, 20),
            slot_id="lunch",
            party_size=2,
        )
