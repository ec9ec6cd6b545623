from datetime import datetime, timedelta, timezone
from typing import Sequence

import jwt
from jwt import InvalidTokenError

from ..domain.context import Requester
from ..models import Role


def create_access_token(
    *,
    requester: Requester,
    secret: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(hours=2))
    payload = {
        "sub": requester.user_id,
        "name": requester.name,
        "role": requester.role.value,
        "iat": now,
        "exp": exp,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    *,
    secret: str,
    algorithms: Sequence[str],
) -> Requester:
    try:
        payload = jwt.decode(token, secret, algorithms=list(algorithms))
    except InvalidTokenError as exc:  # includes ExpiredSignatureError
        raise ValueError("invalid token") from exc

    sub = payload.get("sub")
    if not sub:
        raise ValueError("token missing sub")
    name = payload.get("name") or ""
    try:
        role = Role(payload.get("role", Role.STUDENT.value))
    except ValueError as exc:
        raise ValueError("token role is not recognised") from exc
    return Requester(user_id=str(sub), name=str(name), role=role)
