"""In-memory coordination layer encapsulating seat state transitions."""

from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional, Set, Tuple
import logging
import threading

from errors import BookingError, ReleaseError
from models import Seat, SeatStatus

logger = logging.getLogger(__name__)


class SeatInventory:
    """Thread-safe owner of a fixed block of numbered seats.

    Seats are numbered from 1 to ``total_seats``. Every state change goes
    through ``reserve``, ``release`` or ``release_all``, each of which runs
    under the inventory lock, so a rejected reservation never leaves a
    partially occupied batch behind.
    """

    def __init__(self, total_seats: int):
        if isinstance(total_seats, bool) or not isinstance(total_seats, int) or total_seats <= 0:
            raise ValueError(f"total_seats must be a positive integer, got {total_seats!r}")
        self.total_seats = total_seats
        self._seats: List[Seat] = [Seat(number) for number in range(1, total_seats + 1)]
        self._lock = threading.Lock()

    @contextmanager
    def locked(self):
        """Hold the inventory lock for the duration of the block."""
        with self._lock:
            yield

    def _in_range(self, seat_number: int) -> bool:
        return 1 <= seat_number <= self.total_seats

    def _seat(self, seat_number: int) -> Seat:
        return self._seats[seat_number - 1]

    def _available_count(self) -> int:
        return sum(1 for seat in self._seats if not seat.occupied)

    def available_count(self) -> int:
        """Number of seats currently free."""
        with self.locked():
            return self._available_count()

    def is_occupied(self, seat_number: int) -> bool:
        """Return whether the seat is taken; numbers outside the inventory are never occupied."""
        if not self._in_range(seat_number):
            return False
        with self.locked():
            return self._seat(seat_number).occupied

    def available_seat_numbers(self) -> List[int]:
        with self.locked():
            return [seat.number for seat in self._seats if not seat.occupied]

    def _validate(self, seat_numbers: List[int]) -> Optional[BookingError]:
        # Count first, then each seat in request order; first violation wins.
        if self._available_count() < len(seat_numbers):
            return BookingError.capacity_exceeded()

        seen: Set[int] = set()
        for seat_number in seat_numbers:
            if not self._in_range(seat_number) or self._seat(seat_number).occupied:
                return BookingError.seat_unavailable(seat_number)
            if seat_number in seen:
                return BookingError.duplicate_seat(seat_number)
            seen.add(seat_number)

        return None

    def reserve(self, seat_numbers: Iterable[int]) -> Tuple[Optional[List[int]], Optional[BookingError]]:
        """Atomically occupy every requested seat, or none of them.

        Returns ``(reserved_seat_numbers, None)`` on success and
        ``(None, error)`` when the request is rejected.
        """
        requested = list(seat_numbers)

        with self.locked():
            error = self._validate(requested)
            if error:
                logger.debug(f"Reservation of {requested} rejected: {error.kind.value}")
                return None, error

            for seat_number in requested:
                self._seat(seat_number).status = SeatStatus.OCCUPIED

        return requested, None

    def release(self, seat_number: int) -> Optional[ReleaseError]:
        """Free one occupied seat. Returns an advisory error when nothing changed."""
        if not self._in_range(seat_number):
            return ReleaseError.out_of_range(seat_number)

        with self.locked():
            seat = self._seat(seat_number)
            if not seat.occupied:
                return ReleaseError.not_booked(seat_number)
            seat.status = SeatStatus.FREE

        return None

    def release_all(self) -> int:
        """Free every occupied seat and return how many were freed."""
        released = 0
        with self.locked():
            for seat in self._seats:
                if seat.occupied:
                    seat.status = SeatStatus.FREE
                    released += 1
        return released

    def snapshot(self) -> Dict:
        """Return occupancy aggregates and per-seat details."""
        with self.locked():
            seats_detail = [
                {"seat_number": seat.number, "status": seat.status.value}
                for seat in self._seats
            ]
            available = self._available_count()

        booked = self.total_seats - available
        return {
            "total_seats": self.total_seats,
            "available_seats": available,
            "booked_seats": booked,
            "available_seat_numbers": [
                detail["seat_number"] for detail in seats_detail
                if detail["status"] == SeatStatus.FREE.value
            ],
            "seats": seats_detail,
            "invariants_valid": 0 <= booked <= self.total_seats,
        }
