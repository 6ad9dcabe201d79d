# pinify/api/routes/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from pinify.db.base import get_db
from pinify.db.models.added_place import AddedPlace
from pinify.db.models.friend_request import FriendRequest
from pinify.db.models.user import User
from pinify.schemas.place import PlaceCategory, PlaceResponse, ProfilePlaceResponse
from pinify.schemas.user import UserProfileResponse, UserResponse
from pinify.schemas.friend import RelationshipResponse
from pinify.core.security import get_current_user
from pinify.core.session import SessionContext, get_session_context
from pinify.core.friendship import relationship_state

router = APIRouter(prefix="/users", tags=["users"])


def get_user_by_username(db: Session, username: str) -> User:
    user = db.query(User).filter(User.username == username.lower()).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def pending_requests_between(db: Session, a_id: int, b_id: int) -> List[FriendRequest]:
    return (
        db.query(FriendRequest)
        .filter(
            FriendRequest.status == "pending",
            or_(
                and_(FriendRequest.sender_id == a_id, FriendRequest.receiver_id == b_id),
                and_(FriendRequest.sender_id == b_id, FriendRequest.receiver_id == a_id),
            ),
        )
        .all()
    )


# Remove a place from my profile; the shared place and its reviews stay
@router.delete("/me/places/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_added_place(
    place_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    added = db.get(AddedPlace, (current_user.id, place_id))
    if not added:
        raise HTTPException(status_code=404, detail="Place is not on your profile")
    db.delete(added)
    db.commit()
    return


@router.get("/{username}", response_model=UserProfileResponse)
def get_profile(username: str, db: Session = Depends(get_db)):
    return get_user_by_username(db, username)


@router.get("/{username}/places", response_model=List[ProfilePlaceResponse])
def get_user_places(
    username: str,
    city: Optional[str] = Query(None),
    district: Optional[str] = Query(None),
    category: Optional[PlaceCategory] = Query(None),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    db: Session = Depends(get_db),
):
    user = get_user_by_username(db, username)
    added = (
        db.query(AddedPlace)
        .filter(AddedPlace.user_id == user.id)
        .order_by(AddedPlace.added_at.desc())
        .all()
    )

    results = []
    for a in added:
        p = a.place
        if p is None:
            continue
        if city and p.city != city:
            continue
        if district and p.district != district:
            continue
        if category and category.value not in (p.categories or []):
            continue
        # personal rating first, shared aggregate when the user has none
        if min_rating and (a.rating or p.avg_rating) < min_rating:
            continue
        results.append(
            ProfilePlaceResponse(
                **PlaceResponse.model_validate(p).model_dump(),
                user_rating=a.rating,
                added_at=a.added_at,
            )
        )
    return results


@router.get("/{username}/friends", response_model=List[UserResponse])
def get_user_friends(username: str, db: Session = Depends(get_db)):
    user = get_user_by_username(db, username)
    return sorted(user.friends, key=lambda f: f.username)


@router.get("/{username}/relationship", response_model=RelationshipResponse)
def get_relationship(
    username: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    target = get_user_by_username(db, username)
    pending = pending_requests_between(db, ctx.user_id, target.id)
    state = relationship_state(ctx.user_id, target.id, ctx.friend_ids or set(), pending)
    return RelationshipResponse(user_id=target.id, state=state)
