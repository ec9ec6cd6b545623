class BookingError(Exception):
    """Base class for expected booking outcomes; the message is user-facing."""

    kind = "error"

    @property
    def reason(self) -> str:
        return str(self)


class ValidationError(BookingError):
    kind = "validation"


class RoomNotFoundError(ValidationError):
    pass


class UnknownSlotError(ValidationError):
    pass


class EligibilityRejection(BookingError):
    kind = "eligibility"
    rule = "eligibility"


class RestrictedRoomError(EligibilityRejection):
    rule = "restricted"


class RoomDisabledError(EligibilityRejection):
    rule = "disabled"


class TeamSizeError(EligibilityRejection):
    rule = "team_size"


class CapacityError(EligibilityRejection):
    rule = "capacity"

    def __init__(self, message: str, *, remaining: int) -> None:
        super().__init__(message)
        self.remaining = remaining


class CancelNotAllowedError(BookingError):
    kind = "forbidden"


class ReservationNotFoundError(BookingError):
    kind = "not_found"


class StoreFailure(Exception):
    """I/O failure talking to the room directory or reservation store."""

    def __init__(self, message: str = "storage unavailable, please try again") -> None:
        super().__init__(message)
