# pinify/core/duplicates.py
"""
Duplicate place detection for the add-place flow.

Two submissions are the same place when their trimmed name, city and district
are exactly equal (case-sensitive; empty matches empty) and their coordinates
fall within COORDINATE_TOLERANCE degrees of each other on *both* axes. The
second check is a bounding box, not a geodesic distance.

The equality part is pushed to the store; the coordinate part runs in memory so
no range filter on two columns is needed.
"""
from typing import Iterable, Optional, TypeVar

from sqlalchemy.orm import Session

from pinify.db.models.place import Place

# ~22 m at the equator
COORDINATE_TOLERANCE = 0.0002

P = TypeVar("P")


def normalize_name(name: str) -> str:
    return name.strip()


def is_nearby(lat1: float, lng1: float, lat2: float, lng2: float,
              tolerance: float = COORDINATE_TOLERANCE) -> bool:
    return abs(lat1 - lat2) < tolerance and abs(lng1 - lng2) < tolerance


def pick_duplicate(candidates: Iterable[P], lat: float, lng: float) -> Optional[P]:
    """First candidate (in result order) whose location is within tolerance."""
    for c in candidates:
        if is_nearby(c.latitude, c.longitude, lat, lng):
            return c
    return None


def find_duplicate_place(db: Session, name: str, city: str, district: str,
                         lat: float, lng: float) -> Optional[Place]:
    matches = (
        db.query(Place)
        .filter(
            Place.name == normalize_name(name),
            Place.city == city,
            Place.district == district,
        )
        .order_by(Place.id)
        .all()
    )
    return pick_duplicate(matches, lat, lng)
