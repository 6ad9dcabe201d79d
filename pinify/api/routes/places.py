# pinify/api/routes/places.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from pinify.db.base import get_db
from pinify.db.models.place import Place
from pinify.db.models.review import Review
from pinify.db.models.user import User
from pinify.schemas.place import (
    AddPlaceResponse,
    PlaceCategory,
    PlaceCreate,
    PlaceDetailResponse,
    PlaceResponse,
)
from pinify.schemas.review import ReviewResponse
from pinify.core.security import get_current_user
from pinify.core.session import SessionContext, get_session_context
from pinify.core.duplicates import find_duplicate_place, normalize_name
from pinify.core.ratings import recalculate_place_rating, sync_added_place_rating
from pinify.core.friendship import filter_places, unique_cities, unique_districts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/places", tags=["places"])


# Add a place (or link to an existing one) together with the submitter's review.
# Each step commits on its own; a failure midway leaves the earlier steps applied.
@router.post("", response_model=AddPlaceResponse, status_code=status.HTTP_201_CREATED)
def add_place(
    place_in: PlaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not place_in.categories:
        raise HTTPException(status_code=400, detail="Please select at least one category.")

    name = normalize_name(place_in.name)
    if not name:
        raise HTTPException(status_code=400, detail="Place name is required.")

    lat, lng = place_in.location.lat, place_in.location.lng

    place = find_duplicate_place(db, name, place_in.city, place_in.district, lat, lng)
    created = place is None

    if created:
        # the creator's rating seeds the aggregate
        place = Place(
            owner_id=current_user.id,
            name=name,
            city=place_in.city,
            district=place_in.district,
            categories=[c.value for c in place_in.categories],
            google_place_id=place_in.google_place_id,
            latitude=lat,
            longitude=lng,
            avg_rating=float(place_in.rating),
            rating_count=1,
        )
        db.add(place)
        db.commit()
        db.refresh(place)
        logger.info("Place %s (%s) created by user %s", place.id, place.name, current_user.id)
    else:
        logger.info("Place submission by user %s resolved to existing place %s", current_user.id, place.id)

    own_review = (
        db.query(Review)
        .filter(Review.place_id == place.id, Review.user_id == current_user.id)
        .first()
    )
    if own_review is None:
        review = Review(
            place_id=place.id,
            user_id=current_user.id,
            username=current_user.display_name or "Anonymous",
            rating=place_in.rating,
            comment=place_in.comment,
        )
        db.add(review)
        db.commit()
        personal_rating = place_in.rating
    else:
        # already reviewed: keep that review, the profile mirrors it
        personal_rating = own_review.rating

    sync_added_place_rating(db, current_user.id, place.id, personal_rating)

    if not created:
        recalculate_place_rating(db, place.id)

    db.refresh(place)
    return AddPlaceResponse(place=PlaceResponse.model_validate(place), created=created)


# Map view
@router.get("", response_model=List[PlaceResponse])
def list_places(
    owner: str = Query("all", pattern="^(all|my|friends)$"),
    city: Optional[str] = Query(None),
    district: Optional[str] = Query(None),
    category: Optional[List[PlaceCategory]] = Query(None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    places = db.query(Place).order_by(Place.created_at.desc(), Place.id.desc()).all()
    return filter_places(
        places,
        viewer_id=ctx.user_id,
        owner=owner,
        friend_ids=ctx.friend_ids,
        city=city,
        district=district,
        categories=[c.value for c in category] if category else None,
    )


@router.get("/cities", response_model=List[str])
def list_cities(db: Session = Depends(get_db)):
    return unique_cities(db.query(Place).all())


@router.get("/districts", response_model=List[str])
def list_districts(city: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return unique_districts(db.query(Place).all(), city)


@router.get("/{place_id}", response_model=PlaceDetailResponse)
def get_place(place_id: int, db: Session = Depends(get_db)):
    place = db.query(Place).filter(Place.id == place_id).first()
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")

    reviews = (
        db.query(Review)
        .filter(Review.place_id == place_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return PlaceDetailResponse(
        **PlaceResponse.model_validate(place).model_dump(),
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
    )
