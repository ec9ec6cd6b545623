from __future__ import annotations

from datetime import date as calendar_date
from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Enum, ForeignKey, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql.sqltypes import BigInteger, Date, DateTime, Integer, String, Text


class Base(DeclarativeBase):
    pass


class Role(StrEnum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"

    @property
    def is_privileged(self) -> bool:
        return self is not Role.STUDENT


class Zone(StrEnum):
    LEFT_WING = "LEFT WING"
    ORYANG_HALL = "ORYANG HALL"
    RIGHT_WING = "RIGHT WING"


class ReservationStatus(StrEnum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


class MemberRole(StrEnum):
    OWNER = "owner"
    MEMBER = "member"


def _enum_column(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        values_callable=lambda cls: [e.value for e in cls],
        native_enum=False,
    )


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="chk_rooms_capacity"),
        CheckConstraint("min_team_size >= 1", name="chk_rooms_min_team"),
        CheckConstraint(
            "max_team_size IS NULL OR max_team_size >= min_team_size",
            name="chk_rooms_max_team",
        ),
        Index("idx_rooms_zone_floor", "zone", "floor", "display_order"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    zone: Mapped[Zone] = mapped_column(_enum_column(Zone), nullable=False)
    floor: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    # NULL capacity means no ceiling
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_team_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_team_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    restricted_access: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    disabled_reason: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    note: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("party_size >= 1", name="chk_res_party_size"),
        Index("idx_res_room_date_slot", "room_id", "date", "slot_id"),
        Index("idx_res_date", "date"),
        Index("idx_res_requester", "requester_id"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    requester_id: Mapped[str] = mapped_column(String(64), nullable=False)
    requester_name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_id: Mapped[str] = mapped_column(ForeignKey("rooms.id"), nullable=False)
    room_name: Mapped[str] = mapped_column(String(255), nullable=False)
    zone: Mapped[str] = mapped_column(String(64), nullable=False)
    floor: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    date: Mapped[calendar_date] = mapped_column(Date, nullable=False)
    slot_id: Mapped[str] = mapped_column(String(16), nullable=False)
    time_range: Mapped[str] = mapped_column(String(32), nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    participants: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    supervisor: Mapped[str] = mapped_column(String(255), nullable=False)
    club: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[ReservationStatus] = mapped_column(
        _enum_column(ReservationStatus),
        nullable=False,
        default=ReservationStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    members: Mapped[list["ReservationMember"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ReservationMember(Base):
    """Read-only roster projection of a reservation, one row per person."""

    __tablename__ = "reservation_members"
    __table_args__ = (Index("idx_members_reservation", "reservation_id"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    reservation_id: Mapped[int] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False
    )
    member_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[MemberRole] = mapped_column(_enum_column(MemberRole), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    reservation: Mapped["Reservation"] = relationship(back_populates="members")
