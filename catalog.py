"""Static catalog of movies, theaters and the shows built from them."""

from typing import Dict, List, Optional, Sequence, Tuple
import logging
import re

from models import Movie, ShowTier, Theater
from show import Show

logger = logging.getLogger(__name__)

DEFAULT_SEATS_PER_SHOW = 78

LANGUAGES = ("Tamil", "English", "Kannada", "Hindi", "Malayalam", "Telugu")

DEMO_MOVIES = [
    ("Bagheera", 4.6),
    ("Amaran", 4.8),
    ("Singham Again", 3.7),
    ("Bhool Bhulaiyaa 3", 3.0),
    ("Venom: The Last Dance", 4.0),
]

# First half are regular screens, second half premium.
DEMO_THEATERS = [
    "Navrang",
    "Limeright Private Theatre",
    "Anjana",
    "Veeresh",
    "Gopalan",
    "PVR Premium",
    "Urvashi",
    "PVR MSR",
    "Victoria",
    "PVR - Nexus Mall",
]

DEMO_SHOW_TIMES = [
    ("10:00 AM", "01:00 PM", "04:00 PM"),
    ("11:00 AM", "02:00 PM", "05:00 PM"),
    ("12:00 PM", "03:00 PM", "06:00 PM"),
    ("01:00 PM", "04:00 PM", "07:00 PM"),
    ("10:30 PM", "06:15 PM", "08:45 PM"),
]

SHOW_DATES = (("2024-12-01", "Sunday"), ("2024-12-02", "Monday"))

VIEWING_OPTIONS = ("2D", "3D")


def slugify(text: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')


class Catalog:
    """Read-mostly registry of movies, theaters and their shows."""

    def __init__(
        self,
        movies: Sequence[Movie],
        theaters: Sequence[Theater],
        show_dates: Sequence[Tuple[str, str]] = SHOW_DATES,
        viewing_options: Sequence[str] = VIEWING_OPTIONS,
    ):
        self._movies = list(movies)
        self._theaters = list(theaters)
        self._show_dates = tuple(show_dates)
        self._viewing_options = tuple(viewing_options)
        self._shows: Dict[str, Show] = {}
        self._by_movie_tier: Dict[Tuple[int, ShowTier], Show] = {}
        self._theater_tiers: Dict[int, ShowTier] = {}

    def add_show(
        self,
        movie_index: int,
        theater_index: int,
        show_times: Sequence[str],
        total_seats: int,
        tier: ShowTier,
    ) -> Show:
        """Create a show for a movie/theater pair (both 1-based) and register it."""
        movie = self._movies[movie_index - 1]
        theater = self._theaters[theater_index - 1]
        show_id = f"{slugify(movie.title)}-{slugify(theater.name)}"
        if show_id in self._shows:
            raise ValueError(f"show already exists: {show_id}")

        show_date, show_day = self._show_dates[0]
        show = Show(show_id, movie, theater, show_times, show_date, show_day, total_seats, tier)
        self._shows[show_id] = show
        self._by_movie_tier.setdefault((movie_index, tier), show)
        self._theater_tiers[theater_index] = tier
        return show

    def movies(self) -> List[Movie]:
        return list(self._movies)

    def theaters(self) -> List[Theater]:
        return list(self._theaters)

    def shows(self) -> List[Show]:
        return list(self._shows.values())

    def show_dates(self) -> List[Tuple[str, str]]:
        return list(self._show_dates)

    def viewing_options(self) -> List[str]:
        return list(self._viewing_options)

    def get_show(self, show_id: str) -> Optional[Show]:
        return self._shows.get(show_id)

    def find_show(self, movie_index: int, theater_index: int) -> Optional[Show]:
        """Look up the show for a menu choice; indices are 1-based.

        The theater choice only selects the tier: any regular theater leads
        to the movie's regular show, any premium theater to its premium show.
        """
        tier = self._theater_tiers.get(theater_index)
        if tier is None:
            return None
        return self._by_movie_tier.get((movie_index, tier))

    def reset(self) -> Dict[str, int]:
        """Cancel every seat on every show."""
        released = sum(show.cancel_all() for show in self._shows.values())
        return {"shows_reset": len(self._shows), "seats_released": released}


def build_demo_catalog(total_seats: int = DEFAULT_SEATS_PER_SHOW) -> Catalog:
    """Populate the catalog with the demo lineup.

    Movie ``i`` plays as a regular show at theater ``i`` and as a premium
    show at theater ``i + 5``.
    """
    movies = [Movie(title, rating, LANGUAGES) for title, rating in DEMO_MOVIES]
    theaters = [Theater(name) for name in DEMO_THEATERS]
    catalog = Catalog(movies, theaters)

    regular_count = len(DEMO_THEATERS) // 2
    for index, show_times in enumerate(DEMO_SHOW_TIMES, start=1):
        catalog.add_show(index, index, show_times, total_seats, ShowTier.REGULAR)
        catalog.add_show(index, index + regular_count, show_times, total_seats, ShowTier.PREMIUM)

    logger.info(f"Demo catalog ready: {len(catalog.shows())} shows, {total_seats} seats each")
    return catalog
