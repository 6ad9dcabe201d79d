from types import SimpleNamespace

import pytest

from pinify.core.friendship import (
    FriendRequestNotAllowed,
    check_friend_request,
    filter_places,
    relationship_state,
    unique_cities,
    unique_districts,
)


def _req(sender, receiver, status="pending"):
    return SimpleNamespace(sender_id=sender, receiver_id=receiver, status=status)


def _place(owner_id, city="Istanbul", district="Fatih", categories=("Coffee",)):
    return SimpleNamespace(owner_id=owner_id, city=city, district=district, categories=list(categories))


class TestRelationshipState:
    def test_self(self):
        assert relationship_state(1, 1, set(), []) == "self"

    def test_friends(self):
        assert relationship_state(1, 2, {2}, []) == "friends"

    def test_pending_directions(self):
        assert relationship_state(1, 2, set(), [_req(1, 2)]) == "pending-sent"
        assert relationship_state(1, 2, set(), [_req(2, 1)]) == "pending-received"

    def test_rejected_request_reverts_to_none(self):
        assert relationship_state(1, 2, set(), [_req(1, 2, "rejected")]) == "none"


@pytest.mark.parametrize(
    "viewer, target, friends, pending, message",
    [
        (1, 1, set(), [], "You cannot add yourself."),
        (1, 2, {2}, [], "You are already friends."),
        (1, 2, set(), [_req(1, 2)], "Friend request already sent."),
        (1, 2, set(), [_req(2, 1)], "This user has already sent you a request."),
    ],
)
def test_check_friend_request_guards(viewer, target, friends, pending, message):
    with pytest.raises(FriendRequestNotAllowed, match=message):
        check_friend_request(viewer, target, friends, pending)


def test_check_friend_request_allows_after_rejection():
    check_friend_request(1, 2, set(), [_req(1, 2, "rejected")])


class TestFilterPlaces:
    def setup_method(self):
        self.mine = _place(1)
        self.friend = _place(2, city="Ankara", district="Cankaya", categories=["Food", "View"])
        self.stranger = _place(3, categories=["Mall"])
        self.places = [self.mine, self.friend, self.stranger]

    def test_all(self):
        assert filter_places(self.places, 1) == self.places

    def test_my_places(self):
        assert filter_places(self.places, 1, owner="my") == [self.mine]

    def test_friends_excludes_own_places(self):
        assert filter_places(self.places, 1, owner="friends", friend_ids={1, 2}) == [self.friend]

    def test_friends_not_loaded_fails_closed(self):
        assert filter_places(self.places, 1, owner="friends", friend_ids=None) == []

    def test_city_and_district_are_case_insensitive_substrings(self):
        assert filter_places(self.places, 1, city="ank") == [self.friend]
        assert filter_places(self.places, 1, district="FAT") == [self.mine, self.stranger]

    def test_categories_match_any(self):
        assert filter_places(self.places, 1, categories=["View", "Mall"]) == [self.friend, self.stranger]

    def test_unknown_owner_filter(self):
        with pytest.raises(ValueError):
            filter_places(self.places, 1, owner="everyone")


def test_unique_cities_and_districts():
    places = [_place(1), _place(2, city="Ankara", district="Cankaya"), _place(3, district=""), _place(4)]

    assert unique_cities(places) == ["Ankara", "Istanbul"]
    assert unique_districts(places) == ["Cankaya", "Fatih"]
    assert unique_districts(places, "istanbul") == ["Fatih"]
