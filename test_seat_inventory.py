"""
Test suite for the seat inventory state machine.
Covers reservation precedence, atomicity, release and concurrent access.
"""

import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from errors import BookingErrorKind, ReleaseErrorKind
from seat_inventory import SeatInventory


def occupied_numbers(inventory):
    return [n for n in range(1, inventory.total_seats + 1) if inventory.is_occupied(n)]


@pytest.mark.parametrize("total", [1, 3, 78])
def test_new_inventory_is_all_free(total):
    inventory = SeatInventory(total)
    assert inventory.available_count() == total
    assert occupied_numbers(inventory) == []
    assert inventory.available_seat_numbers() == list(range(1, total + 1))


@pytest.mark.parametrize("total", [0, -5, 2.5, True, "10"])
def test_rejects_invalid_capacity(total):
    with pytest.raises(ValueError):
        SeatInventory(total)


def test_reserve_then_release_scenario():
    """Reserve, collide, release and double-release on a 78 seat show."""
    inventory = SeatInventory(78)

    reserved, error = inventory.reserve([5, 12, 40])
    assert error is None
    assert reserved == [5, 12, 40]
    assert inventory.available_count() == 75

    reserved, error = inventory.reserve([12, 20])
    assert reserved is None
    assert error.kind == BookingErrorKind.SEAT_UNAVAILABLE
    assert error.seat_number == 12
    assert inventory.available_count() == 75
    assert not inventory.is_occupied(20)

    assert inventory.release(12) is None
    assert inventory.available_count() == 76
    assert not inventory.is_occupied(12)

    error = inventory.release(12)
    assert error.kind == ReleaseErrorKind.SEAT_NOT_BOOKED
    assert error.seat_number == 12


def test_capacity_checked_before_seats():
    inventory = SeatInventory(3)
    reserved, error = inventory.reserve([1, 2, 3, 4])
    assert reserved is None
    assert error.kind == BookingErrorKind.CAPACITY_EXCEEDED
    assert error.seat_number is None
    assert inventory.available_count() == 3


def test_capacity_wins_over_out_of_range_seat():
    inventory = SeatInventory(10)
    inventory.reserve(range(1, 9))
    _, error = inventory.reserve([9, 10, 99])
    assert error.kind == BookingErrorKind.CAPACITY_EXCEEDED


def test_duplicate_seat_rejected_even_when_free():
    inventory = SeatInventory(78)
    reserved, error = inventory.reserve([7, 7])
    assert reserved is None
    assert error.kind == BookingErrorKind.DUPLICATE_SEAT
    assert error.seat_number == 7
    assert not inventory.is_occupied(7)
    assert inventory.available_count() == 78


def test_unavailable_reported_before_later_duplicate():
    inventory = SeatInventory(10)
    inventory.reserve([4])
    _, error = inventory.reserve([2, 2, 4])
    # request order decides: the second 2 is a duplicate before 4 is inspected
    assert error.kind == BookingErrorKind.DUPLICATE_SEAT
    assert error.seat_number == 2

    _, error = inventory.reserve([4, 2, 2])
    assert error.kind == BookingErrorKind.SEAT_UNAVAILABLE
    assert error.seat_number == 4


@pytest.mark.parametrize("seat_number", [0, -1, 79, 1000])
def test_out_of_range_seat_unavailable(seat_number):
    inventory = SeatInventory(78)
    reserved, error = inventory.reserve([1, seat_number])
    assert reserved is None
    assert error.kind == BookingErrorKind.SEAT_UNAVAILABLE
    assert error.seat_number == seat_number
    assert not inventory.is_occupied(1)


def test_failed_reserve_leaves_no_partial_state():
    inventory = SeatInventory(20)
    inventory.reserve([15])
    before = occupied_numbers(inventory)

    _, error = inventory.reserve([1, 2, 3, 15])
    assert error is not None
    assert occupied_numbers(inventory) == before


def test_successful_reserve_occupies_exactly_requested_seats():
    inventory = SeatInventory(50)
    rng = random.Random(7)
    requested = rng.sample(range(1, 51), 12)

    reserved, error = inventory.reserve(requested)
    assert error is None
    assert sorted(reserved) == sorted(requested)
    assert inventory.available_count() == 38
    assert occupied_numbers(inventory) == sorted(requested)


def test_reserve_then_release_round_trip():
    inventory = SeatInventory(30)
    inventory.reserve([3, 4])
    before = inventory.available_count()

    inventory.reserve([17])
    assert inventory.release(17) is None
    assert inventory.available_count() == before
    assert not inventory.is_occupied(17)


@pytest.mark.parametrize("seat_number", [0, 31, -2])
def test_release_out_of_range_is_advisory(seat_number):
    inventory = SeatInventory(30)
    inventory.reserve([1])
    error = inventory.release(seat_number)
    assert error.kind == ReleaseErrorKind.SEAT_INDEX_OUT_OF_RANGE
    assert "out of range" in error.message
    assert inventory.available_count() == 29


def test_release_all_restores_full_capacity():
    inventory = SeatInventory(78)
    inventory.reserve([1, 2, 3])
    inventory.reserve([70, 78])

    assert inventory.release_all() == 5
    assert inventory.available_count() == 78
    assert inventory.release_all() == 0


def test_snapshot_reports_totals():
    inventory = SeatInventory(5)
    inventory.reserve([2, 4])
    snapshot = inventory.snapshot()

    assert snapshot["total_seats"] == 5
    assert snapshot["available_seats"] == 3
    assert snapshot["booked_seats"] == 2
    assert snapshot["available_seat_numbers"] == [1, 3, 5]
    assert snapshot["seats"][1] == {"seat_number": 2, "status": "occupied"}
    assert snapshot["invariants_valid"] is True


def test_last_seat_race():
    """Many threads competing for the same seat: exactly one wins."""
    inventory = SeatInventory(10)
    inventory.reserve(range(1, 10))
    barrier = threading.Barrier(20)

    def attempt(_):
        barrier.wait()
        return inventory.reserve([10])

    with ThreadPoolExecutor(max_workers=20) as executor:
        outcomes = list(executor.map(attempt, range(20)))

    winners = [reserved for reserved, error in outcomes if error is None]
    assert winners == [[10]]
    assert inventory.available_count() == 0


def test_concurrent_bookings_never_oversell():
    inventory = SeatInventory(50)

    def user_flow(user_id):
        rng = random.Random(user_id)
        return inventory.reserve(rng.sample(range(1, 51), 2))

    with ThreadPoolExecutor(max_workers=16) as executor:
        outcomes = list(executor.map(user_flow, range(200)))

    booked = [n for reserved, error in outcomes if error is None for n in reserved]
    assert len(booked) == len(set(booked))
    assert inventory.available_count() == 50 - len(booked)
    assert sorted(booked) == occupied_numbers(inventory)
