from decimal import Decimal

import pytest

from errors import BookingErrorKind, ReleaseErrorKind
from models import Movie, ShowTier, Theater
from show import Show

MOVIE = Movie("Amaran", 4.8, ("Tamil", "English"))
THEATER = Theater("Navrang")


def make_show(tier=ShowTier.REGULAR, total_seats=78):
    return Show("amaran-navrang", MOVIE, THEATER, ["11:00 AM", "02:00 PM"],
                "2024-12-01", "Sunday", total_seats, tier)


@pytest.mark.parametrize("tier, price", [
    (ShowTier.REGULAR, Decimal("150")),
    (ShowTier.PREMIUM, Decimal("250")),
])
def test_ticket_price_by_tier(tier, price):
    show = make_show(tier)
    assert show.ticket_price() == price
    assert show.total_price(3) == price * 3


def test_unknown_tier_rejected():
    with pytest.raises(ValueError):
        make_show(tier="Gold")


def test_booking_and_cancellation_delegate_to_inventory():
    show = make_show(total_seats=10)
    assert show.available_seats() == 10

    reserved, error = show.book_seats([1, 2])
    assert error is None
    assert reserved == [1, 2]
    assert show.available_seats() == 8
    assert show.is_seat_booked(2)

    _, error = show.book_seats([2])
    assert error.kind == BookingErrorKind.SEAT_UNAVAILABLE

    assert show.cancel_seat(2) is None
    assert show.cancel_seat(2).kind == ReleaseErrorKind.SEAT_NOT_BOOKED
    assert show.cancel_seat(11).kind == ReleaseErrorKind.SEAT_INDEX_OUT_OF_RANGE
    assert show.available_seat_numbers() == list(range(2, 11))

    assert show.cancel_all() == 1
    assert show.available_seats() == 10


def test_descriptors_are_shared_not_copied():
    regular = make_show(ShowTier.REGULAR)
    premium = Show("amaran-pvr", MOVIE, Theater("PVR Premium"), ["11:00 AM"],
                   "2024-12-01", "Sunday", 78, ShowTier.PREMIUM)
    regular.book_seats([5])

    assert regular.movie is premium.movie
    assert premium.available_seats() == 78


def test_to_dict_reflects_availability():
    show = make_show(ShowTier.PREMIUM, total_seats=4)
    show.book_seats([1])
    info = show.to_dict()

    assert info["movie"]["title"] == "Amaran"
    assert info["theater"] == {"name": "Navrang"}
    assert info["tier"] == "Premium"
    assert info["ticket_price"] == "250"
    assert info["show_times"] == ["11:00 AM", "02:00 PM"]
    assert info["available_seats"] == 3
