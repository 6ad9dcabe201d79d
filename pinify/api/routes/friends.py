# pinify/api/routes/friends.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pinify.db.base import get_db
from pinify.db.models.friend_request import FriendRequest
from pinify.db.models.user import User
from pinify.schemas.friend import FriendRequestCreate, FriendRequestResponse, IncomingRequestResponse
from pinify.core.security import get_current_user, normalize_username
from pinify.core.session import SessionContext, get_session_context
from pinify.core.friendship import FriendRequestNotAllowed, check_friend_request
from pinify.api.routes.users import pending_requests_between

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/friends", tags=["friends"])


def _get_pending_request_for_receiver(db: Session, request_id: int, user: User) -> FriendRequest:
    req = db.query(FriendRequest).filter(FriendRequest.id == request_id).first()
    if not req:
        raise HTTPException(status_code=404, detail="Friend request not found")
    if req.receiver_id != user.id:
        raise HTTPException(status_code=403, detail="Only the receiver can answer this request")
    if req.status != "pending":
        raise HTTPException(status_code=400, detail="Friend request is no longer pending")
    return req


# Send a request by username
@router.post("/requests", response_model=FriendRequestResponse, status_code=status.HTTP_201_CREATED)
def send_friend_request(
    payload: FriendRequestCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    username = normalize_username(payload.username)
    if username == ctx.user.username:
        raise HTTPException(status_code=400, detail="You cannot add yourself.")

    target = db.query(User).filter(User.username == username).first()
    if not target:
        raise HTTPException(status_code=404, detail="User not found.")

    pending = pending_requests_between(db, ctx.user_id, target.id)
    try:
        check_friend_request(ctx.user_id, target.id, ctx.friend_ids or set(), pending)
    except FriendRequestNotAllowed as e:
        raise HTTPException(status_code=400, detail=str(e))

    req = FriendRequest(sender_id=ctx.user_id, receiver_id=target.id, status="pending")
    db.add(req)
    db.commit()
    db.refresh(req)
    logger.info("Friend request %s sent from %s to %s", req.id, ctx.user_id, target.id)
    return req


@router.get("/requests/incoming", response_model=List[IncomingRequestResponse])
def list_incoming_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return (
        db.query(FriendRequest)
        .filter(FriendRequest.receiver_id == current_user.id, FriendRequest.status == "pending")
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id.desc())
        .all()
    )


# Accept: request status and both friend rows go out in a single commit
@router.post("/requests/{request_id}/accept", response_model=FriendRequestResponse)
def accept_friend_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    req = _get_pending_request_for_receiver(db, request_id, current_user)
    sender = req.sender

    req.status = "accepted"
    if sender not in current_user.friends:
        current_user.friends.append(sender)
    if current_user not in sender.friends:
        sender.friends.append(current_user)
    db.commit()
    db.refresh(req)

    logger.info("Users %s and %s are now friends", sender.id, current_user.id)
    return req


@router.post("/requests/{request_id}/reject", response_model=FriendRequestResponse)
def reject_friend_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    req = _get_pending_request_for_receiver(db, request_id, current_user)
    req.status = "rejected"
    db.commit()
    db.refresh(req)
    return req


# Remove a friend from both sides in a single commit
@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_friend(
    friend_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    friend = db.query(User).filter(User.id == friend_id).first()
    if not friend or friend not in current_user.friends:
        raise HTTPException(status_code=404, detail="You are not friends with this user")

    current_user.friends.remove(friend)
    if current_user in friend.friends:
        friend.friends.remove(current_user)
    db.commit()

    logger.info("Users %s and %s are no longer friends", current_user.id, friend_id)
    return
