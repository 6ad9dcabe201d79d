from types import SimpleNamespace

from pinify.core.duplicates import (
    find_duplicate_place,
    is_nearby,
    normalize_name,
    pick_duplicate,
)
from pinify.db.models.place import Place


def _place(lat, lng, **kw):
    return SimpleNamespace(latitude=lat, longitude=lng, **kw)


def test_normalize_name_only_trims():
    assert normalize_name("  Cafe X \n") == "Cafe X"
    assert normalize_name("cafe x") == "cafe x"


def test_is_nearby_checks_each_axis_independently():
    assert is_nearby(41.0082, 28.9784, 41.0083, 28.9785)
    assert not is_nearby(41.0082, 28.9784, 41.0085, 28.9784)
    assert not is_nearby(41.0082, 28.9784, 41.0082, 28.9787)


def test_pick_duplicate_returns_first_match_in_order():
    first = _place(41.0082, 28.9784, id=1)
    second = _place(41.0083, 28.9784, id=2)
    far = _place(41.1, 28.9, id=3)

    assert pick_duplicate([far, first, second], 41.00825, 28.9784).id == 1
    assert pick_duplicate([far], 41.0082, 28.9784) is None
    assert pick_duplicate([], 41.0082, 28.9784) is None


def _store(db, **kw):
    values = dict(owner_id=1, name="Cafe X", city="Istanbul", district="Fatih",
                  categories=["Coffee"], latitude=41.0082, longitude=28.9784,
                  avg_rating=4, rating_count=1)
    values.update(kw)
    p = Place(**values)
    db.add(p)
    db.commit()
    return p


def test_find_duplicate_place_requires_exact_fields(db_session):
    stored = _store(db_session)

    assert find_duplicate_place(db_session, " Cafe X ", "Istanbul", "Fatih", 41.0083, 28.9785).id == stored.id
    # case-sensitive
    assert find_duplicate_place(db_session, "cafe x", "Istanbul", "Fatih", 41.0082, 28.9784) is None
    assert find_duplicate_place(db_session, "Cafe X", "Istanbul", "Beyoglu", 41.0082, 28.9784) is None
    assert find_duplicate_place(db_session, "Cafe X", "Istanbul", "Fatih", 41.0085, 28.9784) is None


def test_find_duplicate_place_empty_city_and_district_match(db_session):
    stored = _store(db_session, city="", district="")

    assert find_duplicate_place(db_session, "Cafe X", "", "", 41.0082, 28.9784).id == stored.id
    assert find_duplicate_place(db_session, "Cafe X", "Istanbul", "", 41.0082, 28.9784) is None
