from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from .request_id import get_request_id

AuditAction = Literal[
    "reservation.created",
    "reservation.cancelled",
]


def _build_audit_logger() -> logging.Logger:
    audit = logging.getLogger("audit")
    audit.setLevel(logging.INFO)
    if not audit.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        audit.addHandler(handler)
    audit.propagate = False
    return audit


_audit_logger = _build_audit_logger()


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def emit_audit_log(
    *,
    action: AuditAction,
    actor_id: str,
    actor_role: Any,
    reservation_id: int,
    room_id: Optional[str],
    day: Optional[date],
    slot_id: Optional[str],
    party_size: Optional[int],
) -> None:
    """Write one JSON line for a reservation change.

    Fields that are ``None`` are omitted. Korean text is kept readable
    (no ASCII escaping). Raises ``RuntimeError`` when the line cannot be written
    so the caller can fail the request instead of losing the record.
    """
    fields: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "request_id": get_request_id(),
        "actor_id": actor_id,
        "actor_role": actor_role,
        "reservation_id": reservation_id,
        "room_id": room_id,
        "date": day,
        "slot_id": slot_id,
        "party_size": party_size,
    }
    line = {key: _plain(value) for key, value in fields.items() if value is not None}
    try:
        _audit_logger.info(json.dumps(line, ensure_ascii=False))
    except Exception as exc:
        raise RuntimeError("failed to emit audit log") from exc
