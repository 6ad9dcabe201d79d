# pinify/core/friendship.py
"""
Relationship state between two users and the rules that gate friend requests
and the map's owner filter.

Per viewer/target pair:

    none --(viewer sends)--> pending-sent
    none --(target sends)--> pending-received
    pending-* --accept--> friends
    pending-* --reject--> none        (request row kept as "rejected")
    friends --remove--> none          (both friend rows dropped together)
"""
from typing import Collection, Iterable, List, Optional, Sequence

OWNER_FILTERS = ("all", "my", "friends")


class FriendRequestNotAllowed(Exception):
    """A new friend request fails one of the guard rules. ``str(exc)`` is user-facing."""


def _pending_between(pending_requests: Iterable, sender_id: int, receiver_id: int) -> bool:
    return any(
        r.sender_id == sender_id and r.receiver_id == receiver_id and r.status == "pending"
        for r in pending_requests
    )


def relationship_state(viewer_id: int, target_id: int,
                       viewer_friend_ids: Collection[int],
                       pending_requests: Sequence) -> str:
    if viewer_id == target_id:
        return "self"
    if target_id in viewer_friend_ids:
        return "friends"
    if _pending_between(pending_requests, viewer_id, target_id):
        return "pending-sent"
    if _pending_between(pending_requests, target_id, viewer_id):
        return "pending-received"
    return "none"


def check_friend_request(viewer_id: int, target_id: int,
                         viewer_friend_ids: Collection[int],
                         pending_requests: Sequence) -> None:
    state = relationship_state(viewer_id, target_id, viewer_friend_ids, pending_requests)
    if state == "self":
        raise FriendRequestNotAllowed("You cannot add yourself.")
    if state == "friends":
        raise FriendRequestNotAllowed("You are already friends.")
    if state == "pending-sent":
        raise FriendRequestNotAllowed("Friend request already sent.")
    if state == "pending-received":
        raise FriendRequestNotAllowed("This user has already sent you a request.")


def filter_places(places: Sequence, viewer_id: int, owner: str = "all",
                  friend_ids: Optional[Collection[int]] = None,
                  city: Optional[str] = None, district: Optional[str] = None,
                  categories: Optional[Collection[str]] = None) -> List:
    """Map view filtering.

    ``owner="friends"`` keeps places created by the viewer's friends, never the
    viewer's own. When ``friend_ids`` is None (friend list not loaded) the
    friends filter returns nothing rather than everything.
    """
    if owner not in OWNER_FILTERS:
        raise ValueError(f"owner must be one of {', '.join(OWNER_FILTERS)}")

    result = list(places)

    if city:
        result = [p for p in result if city.lower() in (p.city or "").lower()]
    if district:
        result = [p for p in result if district.lower() in (p.district or "").lower()]
    if categories:
        wanted = set(categories)
        result = [p for p in result if wanted.intersection(p.categories or [])]

    if owner == "my":
        result = [p for p in result if p.owner_id == viewer_id]
    elif owner == "friends":
        if friend_ids is None:
            return []
        result = [p for p in result if p.owner_id in friend_ids and p.owner_id != viewer_id]

    return result


def unique_cities(places: Iterable) -> List[str]:
    return sorted({p.city for p in places if p.city})


def unique_districts(places: Iterable, city: Optional[str] = None) -> List[str]:
    if city:
        places = [p for p in places if (p.city or "").lower() == city.lower()]
    return sorted({p.district for p in places if p.district})
