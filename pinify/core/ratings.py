# pinify/core/ratings.py
import logging
from typing import Iterable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pinify.db.models.added_place import AddedPlace
from pinify.db.models.place import Place
from pinify.db.models.review import Review

logger = logging.getLogger(__name__)


def compute_rating_aggregate(ratings: Iterable[int]) -> Tuple[float, int]:
    values = list(ratings)
    total = len(values)
    if total == 0:
        return 0.0, 0
    return float(sum(values)) / total, total


def recalculate_place_rating(db: Session, place_id: int) -> bool:
    """Re-derive avg_rating/rating_count from every review of the place.

    Runs after the review mutation has been committed. A failure here is logged
    and reported as False; the review write stays in place and the aggregate
    catches up on the next mutation.
    """
    try:
        place = db.query(Place).filter(Place.id == place_id).first()
        if not place:
            logger.warning("Rating recompute skipped, place %s not found", place_id)
            return False
        rows = db.query(Review.rating).filter(Review.place_id == place_id).all()
        place.avg_rating, place.rating_count = compute_rating_aggregate(r.rating for r in rows)
        db.add(place)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error recalculating rating for place %s", place_id)
        return False
    return True


def sync_added_place_rating(db: Session, user_id: int, place_id: int, rating: int) -> AddedPlace:
    # upsert: keeps added_at of an existing record
    added = db.get(AddedPlace, (user_id, place_id))
    if added is None:
        added = AddedPlace(user_id=user_id, place_id=place_id, rating=rating)
    else:
        added.rating = rating
    db.add(added)
    db.commit()
    return added


def clear_added_place_rating(db: Session, user_id: int, place_id: int) -> Optional[AddedPlace]:
    added = db.get(AddedPlace, (user_id, place_id))
    if added is None:
        return None
    added.rating = None
    db.commit()
    return added
