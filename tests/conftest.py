import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pinify.db.base import Base, get_db
from pinify.main import app

PASSWORD = "secret123"


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return (user_json, auth_headers)."""

    def _register(username, email=None):
        resp = client.post(
            "/api/auth/register",
            json={"email": email or f"{username}@example.com", "username": username, "password": PASSWORD},
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


@pytest.fixture
def add_place(client):
    def _add_place(headers, name="Cafe X", lat=41.0082, lng=28.9784, rating=4,
                   city="Istanbul", district="Fatih", categories=("Coffee",), comment=""):
        return client.post(
            "/places",
            json={
                "name": name,
                "city": city,
                "district": district,
                "categories": list(categories),
                "location": {"lat": lat, "lng": lng},
                "rating": rating,
                "comment": comment,
            },
            headers=headers,
        )

    return _add_place
