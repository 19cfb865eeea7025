"""Domain model definitions describing shows, seats and their catalog data."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple
import enum


class SeatStatus(str, enum.Enum):
    """Enumerated seat lifecycle states held by an inventory."""
    FREE = 'free'
    OCCUPIED = 'occupied'


class ShowTier(str, enum.Enum):
    """Show tiers; each carries a flat ticket price."""
    REGULAR = 'Regular'
    PREMIUM = 'Premium'

    @property
    def ticket_price(self) -> Decimal:
        return TIER_PRICES[self]


TIER_PRICES = {
    ShowTier.REGULAR: Decimal('150'),
    ShowTier.PREMIUM: Decimal('250'),
}


class Seat:
    """A single numbered seat. Only SeatInventory changes its status."""

    __slots__ = ('number', 'status')

    def __init__(self, number: int):
        self.number = number
        self.status = SeatStatus.FREE

    @property
    def occupied(self) -> bool:
        return self.status == SeatStatus.OCCUPIED

    def __repr__(self):
        return f"Seat(number={self.number}, status={self.status.value})"


@dataclass(frozen=True)
class Movie:
    title: str
    rating: float
    languages: Tuple[str, ...]

    def to_dict(self):
        return {
            "title": self.title,
            "rating": self.rating,
            "languages": list(self.languages),
        }


@dataclass(frozen=True)
class Theater:
    name: str

    def to_dict(self):
        return {"name": self.name}


@dataclass(frozen=True)
class User:
    """Identity captured by the presentation layer; never validated here."""
    name: str
    contact: str
    email: str

    def to_dict(self):
        return {"name": self.name, "contact": self.contact, "email": self.email}
