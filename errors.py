"""Typed failure values returned by seat reservation and release."""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import enum


class BookingErrorKind(str, enum.Enum):
    CAPACITY_EXCEEDED = 'capacity_exceeded'
    SEAT_UNAVAILABLE = 'seat_unavailable'
    DUPLICATE_SEAT = 'duplicate_seat'


class ReleaseErrorKind(str, enum.Enum):
    SEAT_INDEX_OUT_OF_RANGE = 'seat_index_out_of_range'
    SEAT_NOT_BOOKED = 'seat_not_booked'


@dataclass(frozen=True)
class BookingError:
    """Why a reservation was rejected. The inventory is unchanged when one is returned."""
    kind: BookingErrorKind
    message: str
    seat_number: Optional[int] = None

    @classmethod
    def capacity_exceeded(cls) -> 'BookingError':
        return cls(BookingErrorKind.CAPACITY_EXCEEDED,
                   "Not enough seats available for your request.")

    @classmethod
    def seat_unavailable(cls, seat_number: int) -> 'BookingError':
        return cls(
            BookingErrorKind.SEAT_UNAVAILABLE,
            f"Seat {seat_number} is not available or already booked. "
            "Please choose different seats.",
            seat_number,
        )

    @classmethod
    def duplicate_seat(cls, seat_number: int) -> 'BookingError':
        return cls(
            BookingErrorKind.DUPLICATE_SEAT,
            f"Duplicate seat entry: Seat {seat_number} already chosen for booking.",
            seat_number,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.seat_number is not None:
            payload["seat_number"] = self.seat_number
        return payload


@dataclass(frozen=True)
class ReleaseError:
    """Advisory outcome of a release that changed nothing."""
    kind: ReleaseErrorKind
    message: str
    seat_number: int

    @classmethod
    def out_of_range(cls, seat_number: int) -> 'ReleaseError':
        return cls(ReleaseErrorKind.SEAT_INDEX_OUT_OF_RANGE,
                   f"Seat {seat_number} is out of range.", seat_number)

    @classmethod
    def not_booked(cls, seat_number: int) -> 'ReleaseError':
        return cls(ReleaseErrorKind.SEAT_NOT_BOOKED,
                   f"Seat {seat_number} is not booked, cannot cancel.", seat_number)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind.value, "message": self.message, "seat_number": self.seat_number}
