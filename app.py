"""HTTP entrypoint for the movie seat booking backend."""

from flask import Flask, request, jsonify
from flask_cors import CORS
import logging
import os
from dotenv import load_dotenv
from typing import Any, Dict, List, Optional, Tuple

load_dotenv()
from catalog import DEFAULT_SEATS_PER_SHOW, build_demo_catalog
from errors import BookingErrorKind
from models import User
from payment import process_payment

logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO').upper())
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# Build the catalog once so every request handler shares the same seat inventories
SEATS_PER_SHOW = int(os.getenv('SEATS_PER_SHOW', DEFAULT_SEATS_PER_SHOW))
catalog = build_demo_catalog(SEATS_PER_SHOW)

BOOKING_ERROR_STATUS = {
    BookingErrorKind.CAPACITY_EXCEEDED: 409,
    BookingErrorKind.SEAT_UNAVAILABLE: 409,
    BookingErrorKind.DUPLICATE_SEAT: 400,
}


def bad_request(message: str, *, details: Optional[Dict[str, Any]] = None):
    """Return a uniform 400 payload, optionally including field-level details."""
    payload: Dict[str, Any] = {"error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), 400


def show_not_found():
    return jsonify({"error": "show not found"}), 404


def require_json_object() -> Tuple[Optional[Dict[str, Any]], Optional[Tuple[Any, int]]]:
    """Ensure the request body is a JSON object before proceeding."""
    if not request.is_json:
        return None, bad_request("request body must be a JSON object")

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, bad_request("request body must be a JSON object")

    return data, None


def validate_seat_numbers(seat_numbers: Any) -> Tuple[Optional[List[int]], Optional[Tuple[Any, int]]]:
    """Validate seat numbers, keeping order and any repeats for the inventory to judge."""
    if not isinstance(seat_numbers, list):
        return None, bad_request("seat_numbers must be provided as a non-empty JSON array")

    if len(seat_numbers) == 0:
        return None, bad_request("seat_numbers must contain at least one seat")

    for index, seat in enumerate(seat_numbers):
        if isinstance(seat, bool) or not isinstance(seat, int):  # bool is an int subclass
            return None, bad_request("each seat number must be an integer", details={"index": index})

    return list(seat_numbers), None


def validate_user(user_raw: Any) -> Tuple[Optional[User], Optional[Tuple[Any, int]]]:
    """Build the booking user; fields must be strings but are otherwise unchecked."""
    if not isinstance(user_raw, dict):
        return None, bad_request("user must be a JSON object with name, contact and email")

    fields = {}
    for field in ("name", "contact", "email"):
        value = user_raw.get(field)
        if not isinstance(value, str):
            return None, bad_request(f"user.{field} must be a string", details={"field": field})
        fields[field] = value.strip()

    return User(**fields), None


def pick_option(data: Dict[str, Any], key: str, options: List[str]) -> Tuple[Optional[str], Optional[Tuple[Any, int]]]:
    """Return the requested option, defaulting to the first one offered."""
    if key not in data:
        return options[0], None

    value = data[key]
    if value not in options:
        return None, bad_request(f"{key} must be one of the offered options", details={"options": options})

    return value, None


# API Endpoints

@app.route('/movies', methods=['GET'])
def list_movies():
    """List the movies on offer with their ratings and languages."""
    return jsonify({"movies": [movie.to_dict() for movie in catalog.movies()]})


@app.route('/theaters', methods=['GET'])
def list_theaters():
    return jsonify({"theaters": [theater.to_dict() for theater in catalog.theaters()]})


@app.route('/shows', methods=['GET'])
def list_shows():
    """List every show together with the date and viewing options customers can pick."""
    return jsonify({
        "shows": [show.to_dict() for show in catalog.shows()],
        "show_dates": [{"date": date, "day": day} for date, day in catalog.show_dates()],
        "viewing_options": catalog.viewing_options(),
    })


@app.route('/shows/<show_id>', methods=['GET'])
def get_show(show_id):
    show = catalog.get_show(show_id)
    if show is None:
        return show_not_found()
    return jsonify(show.to_dict())


@app.route('/shows/<show_id>/seats', methods=['GET'])
def get_seat_status(show_id):
    """Return the live seat summary for a show."""
    show = catalog.get_show(show_id)
    if show is None:
        return show_not_found()

    return jsonify(show.seat_status())


@app.route('/shows/<show_id>/book', methods=['POST'])
def book_seats(show_id):
    """Reserve the requested seats, take payment and return the confirmation."""
    show = catalog.get_show(show_id)
    if show is None:
        return show_not_found()

    data, error_response = require_json_object()
    if error_response:
        return error_response

    user, user_error = validate_user(data.get('user'))
    if user_error:
        return user_error

    seat_numbers, seat_error = validate_seat_numbers(data.get('seat_numbers'))
    if seat_error:
        return seat_error

    show_time, option_error = pick_option(data, 'show_time', list(show.show_times))
    if option_error:
        return option_error

    language, option_error = pick_option(data, 'language', list(show.movie.languages))
    if option_error:
        return option_error

    viewing_option, option_error = pick_option(data, 'viewing_option', catalog.viewing_options())
    if option_error:
        return option_error

    show_dates = dict(catalog.show_dates())
    show_date, option_error = pick_option(data, 'show_date', list(show_dates))
    if option_error:
        return option_error

    reserved, booking_error = show.book_seats(seat_numbers)
    if booking_error:
        logger.warning(f"Booking rejected: {show_id}, seats={seat_numbers}, reason={booking_error.kind.value}")
        return jsonify(booking_error.to_dict()), BOOKING_ERROR_STATUS[booking_error.kind]

    amount = show.total_price(len(reserved))
    process_payment(amount)
    logger.info(f"Booking confirmed: {show_id}, seats={reserved}, user={user.name}")

    return jsonify({
        "message": f"Booking confirmed for {user.name}!",
        "user": user.to_dict(),
        "show_id": show.show_id,
        "movie": show.movie.title,
        "theater": show.theater.name,
        "tier": show.tier.value,
        "show_date": show_date,
        "show_day": show_dates[show_date],
        "language": language,
        "viewing_option": viewing_option,
        "show_time": show_time,
        "seat_numbers": reserved,
        "ticket_price": str(show.ticket_price()),
        "amount_paid": str(amount),
    }), 201


@app.route('/shows/<show_id>/cancel', methods=['POST'])
def cancel_seats(show_id):
    """Release each listed seat; failures are reported per seat and do not stop the others."""
    show = catalog.get_show(show_id)
    if show is None:
        return show_not_found()

    data, error_response = require_json_object()
    if error_response:
        return error_response

    seat_numbers, seat_error = validate_seat_numbers(data.get('seat_numbers'))
    if seat_error:
        return seat_error

    results = []
    cancelled = []
    for seat_number in seat_numbers:
        release_error = show.cancel_seat(seat_number)
        if release_error:
            logger.info(f"Cancel skipped: {show_id}, {release_error.message}")
            results.append({"seat_number": seat_number, "cancelled": False, **release_error.to_dict()})
        else:
            cancelled.append(seat_number)
            results.append({"seat_number": seat_number, "cancelled": True})

    if cancelled:
        logger.info(f"Seats cancelled: {show_id}, seats={cancelled}")

    return jsonify({
        "cancelled_seats": cancelled,
        "results": results,
        "available_seats": show.available_seats(),
    }), 200


@app.route('/shows/<show_id>/cancel-all', methods=['POST'])
def cancel_all_seats(show_id):
    show = catalog.get_show(show_id)
    if show is None:
        return show_not_found()

    released = show.cancel_all()
    logger.info(f"All seats cancelled: {show_id}, {released} released")
    return jsonify({
        "message": "all seats cancelled",
        "seats_released": released,
        "available_seats": show.available_seats(),
    }), 200


@app.route('/reset', methods=['POST'])
def reset_all_shows():
    """Administrative endpoint to free every seat of every show."""
    # An empty JSON body is allowed; anything else is rejected
    if request.data:
        data, error_response = require_json_object()
        if error_response:
            return error_response
        if data:
            return bad_request("reset payload must be empty")

    result = catalog.reset()
    logger.info(
        "System reset: %s shows reset, %s seats released",
        result['shows_reset'],
        result['seats_released'],
    )
    return jsonify({"message": "all shows reset", **result}), 200


@app.route('/health', methods=['GET'])
def health_check():
    """Report liveness and the number of shows served."""
    return jsonify({"status": "healthy", "shows": len(catalog.shows())})


if __name__ == '__main__':
    logger.info(f"""
    ================================
    MOVIE SEAT BOOKING SYSTEM
    ================================
    Shows: {len(catalog.shows())} ({SEATS_PER_SHOW} seats each)
    Storage: in-memory
    Concurrency: per-show inventory lock
    ================================
    """)

    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=False, threaded=True)
