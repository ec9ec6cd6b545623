from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from ..config import get_settings


def local_zone() -> ZoneInfo:
    return ZoneInfo(get_settings().timezone)


def now_local() -> datetime:
    return datetime.now(timezone.utc).astimezone(local_zone())


def utc_naive_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
