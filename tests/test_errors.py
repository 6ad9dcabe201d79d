from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from pinify.db.base import get_db
from pinify.main import app


def test_store_error_returns_retry_message(caplog):
    def broken_get_db():
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
        yield db

    app.dependency_overrides[get_db] = broken_get_db
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/places/1")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Something went wrong. Please try again."}
    assert "Store error on GET /places/1" in caplog.text
