# pinify/api/routes/reviews.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pinify.db.base import get_db
from pinify.db.models.place import Place
from pinify.db.models.review import Review
from pinify.db.models.user import User
from pinify.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from pinify.core.security import get_current_user
from pinify.core.ratings import (
    clear_added_place_rating,
    recalculate_place_rating,
    sync_added_place_rating,
)

router = APIRouter(prefix="/places/{place_id}/reviews", tags=["reviews"])


def _get_place_or_404(db: Session, place_id: int) -> Place:
    place = db.query(Place).filter(Place.id == place_id).first()
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


def _get_own_review_or_error(db: Session, place_id: int, review_id: int, user: User) -> Review:
    review = db.query(Review).filter(Review.id == review_id, Review.place_id == place_id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    if review.user_id != user.id:
        raise HTTPException(status_code=403, detail="You can only change your own review")
    return review


# Create review
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    place_id: int,
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    place = _get_place_or_404(db, place_id)

    # one review per user and place, checked before writing
    existing = (
        db.query(Review)
        .filter(Review.place_id == place.id, Review.user_id == current_user.id)
        .first()
    )
    if existing:
        raise HTTPException(status_code=400, detail="You have already reviewed this place.")

    review = Review(
        place_id=place.id,
        user_id=current_user.id,
        username=current_user.display_name or "Anonymous",
        rating=review_in.rating,
        comment=review_in.comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    recalculate_place_rating(db, place.id)
    sync_added_place_rating(db, current_user.id, place.id, review.rating)

    db.refresh(review)
    return review


# Edit own review
@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    place_id: int,
    review_id: int,
    review_in: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    review = _get_own_review_or_error(db, place_id, review_id, current_user)

    review.rating = review_in.rating
    review.comment = review_in.comment
    db.commit()

    sync_added_place_rating(db, current_user.id, place_id, review_in.rating)
    recalculate_place_rating(db, place_id)

    db.refresh(review)
    return review


# Delete own review (and recalc)
@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    place_id: int,
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    review = _get_own_review_or_error(db, place_id, review_id, current_user)

    db.delete(review)
    db.commit()

    clear_added_place_rating(db, current_user.id, place_id)
    recalculate_place_rating(db, place_id)

    return
