"""A scheduled screening bound to its own seat inventory."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from errors import BookingError, ReleaseError
from models import Movie, ShowTier, Theater
from seat_inventory import SeatInventory


class Show:
    """Catalog metadata plus the one SeatInventory this show owns."""

    def __init__(
        self,
        show_id: str,
        movie: Movie,
        theater: Theater,
        show_times: Sequence[str],
        show_date: str,
        show_day: str,
        total_seats: int,
        tier: ShowTier = ShowTier.REGULAR,
    ):
        if not isinstance(tier, ShowTier):
            raise ValueError(f"unknown show tier: {tier!r}")
        self.show_id = show_id
        self.movie = movie
        self.theater = theater
        self.show_times: Tuple[str, ...] = tuple(show_times)
        self.show_date = show_date
        self.show_day = show_day
        self.tier = tier
        self._price = tier.ticket_price
        self._inventory = SeatInventory(total_seats)

    @property
    def total_seats(self) -> int:
        return self._inventory.total_seats

    def ticket_price(self) -> Decimal:
        return self._price

    def total_price(self, seat_count: int) -> Decimal:
        return self._price * seat_count

    def available_seats(self) -> int:
        return self._inventory.available_count()

    def available_seat_numbers(self) -> List[int]:
        return self._inventory.available_seat_numbers()

    def is_seat_booked(self, seat_number: int) -> bool:
        return self._inventory.is_occupied(seat_number)

    def seat_status(self) -> Dict:
        return self._inventory.snapshot()

    def book_seats(self, seat_numbers: Iterable[int]) -> Tuple[Optional[List[int]], Optional[BookingError]]:
        return self._inventory.reserve(seat_numbers)

    def cancel_seat(self, seat_number: int) -> Optional[ReleaseError]:
        return self._inventory.release(seat_number)

    def cancel_all(self) -> int:
        return self._inventory.release_all()

    def to_dict(self) -> Dict:
        """Display view of the show, as listed to a customer choosing seats."""
        return {
            "show_id": self.show_id,
            "movie": self.movie.to_dict(),
            "theater": self.theater.to_dict(),
            "tier": self.tier.value,
            "ticket_price": str(self._price),
            "show_date": self.show_date,
            "show_day": self.show_day,
            "show_times": list(self.show_times),
            "total_seats": self.total_seats,
            "available_seats": self.available_seats(),
        }

    def __repr__(self):
        return (f"Show(show_id={self.show_id!r}, movie={self.movie.title!r}, "
                f"theater={self.theater.name!r}, tier={self.tier.value})")
