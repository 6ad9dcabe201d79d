def test_profile_and_not_found(client, register):
    register("alice")

    resp = client.get("/users/alice")
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert "email" not in resp.json()

    assert client.get("/users/nobody").status_code == 404


def test_profile_places_filters(client, register, add_place):
    _, alice = register("alice")
    _, bob = register("bob")
    add_place(alice, name="Museum", city="Istanbul", district="Fatih", categories=("Historical",), rating=5)
    add_place(alice, name="Kebab", city="Ankara", district="Cankaya", categories=("Food",), rating=2)
    add_place(bob, name="Mall", city="Istanbul", district="Sisli", categories=("Mall",), rating=3)

    def names(**params):
        return sorted(p["name"] for p in client.get("/users/alice/places", params=params).json())

    assert names() == ["Kebab", "Museum"]
    assert names(city="Istanbul") == ["Museum"]
    assert names(district="Cankaya") == ["Kebab"]
    assert names(category="Food") == ["Kebab"]
    assert names(min_rating=3) == ["Museum"]


def test_remove_place_from_profile_keeps_shared_place(client, register, add_place):
    _, alice = register("alice")
    place_id = add_place(alice).json()["place"]["id"]

    resp = client.delete(f"/users/me/places/{place_id}", headers=alice)
    assert resp.status_code == 204
    assert client.get("/users/alice/places").json() == []

    place = client.get(f"/places/{place_id}").json()
    assert place["rating_count"] == 1

    assert client.delete(f"/users/me/places/{place_id}", headers=alice).status_code == 404


def test_relationship_state_endpoint(client, register):
    _, alice = register("alice")
    _, bob = register("bob")

    def state(headers, username):
        return client.get(f"/users/{username}/relationship", headers=headers).json()["state"]

    assert state(alice, "alice") == "self"
    assert state(alice, "bob") == "none"

    client.post("/friends/requests", json={"username": "bob"}, headers=alice)
    assert state(alice, "bob") == "pending-sent"
    assert state(bob, "alice") == "pending-received"
