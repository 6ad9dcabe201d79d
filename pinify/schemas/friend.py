# pinify/schemas/friend.py
from pydantic import BaseModel
from typing import Literal
from datetime import datetime

from pinify.schemas.user import UserResponse

RequestStatus = Literal["pending", "accepted", "rejected"]
RelationshipState = Literal["self", "none", "pending-sent", "pending-received", "friends"]


class FriendRequestCreate(BaseModel):
    username: str


class FriendRequestResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    status: RequestStatus
    created_at: datetime

    class Config:
        from_attributes = True


class IncomingRequestResponse(FriendRequestResponse):
    sender: UserResponse


class RelationshipResponse(BaseModel):
    user_id: int
    state: RelationshipState
