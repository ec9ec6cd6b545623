from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from .config import Settings, get_settings
from .database import async_session
from .domain.context import Requester
from .usecases.admission import SlotAdmissionGate
from .utils.auth import decode_access_token


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


@lru_cache
def get_admission_gate() -> SlotAdmissionGate:
    return SlotAdmissionGate(enabled=get_settings().serialize_admission)


def get_app_settings() -> Settings:
    return get_settings()


async def get_requester(authorization: str | None = Header(default=None)) -> Requester:
    if authorization is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authorization header required")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Bearer token required")

    settings = get_settings()
    try:
        return decode_access_token(token, secret=settings.auth_secret, algorithms=[settings.auth_algorithm])
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token") from exc
