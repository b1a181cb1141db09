# This project was developed with assistance from AI tools.
"""Tests for JWT authentication middleware."""

import uuid
from unittest.mock import AsyncMock, patch

import jwt
import pytest
from db import get_db
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.core.config import settings
from src.middleware.auth import CurrentScope, CurrentUser
from src.schemas.auth import AccessScope, TokenPayload

USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def app():
    app = FastAPI()

    @app.get("/me")
    async def me(user: CurrentUser):
        return {"user_id": str(user.user_id), "username": user.username}

    return app


# ---------------------------------------------------------------------------
# AUTH_DISABLED bypass
# ---------------------------------------------------------------------------


def test_auth_disabled_uses_dev_user(monkeypatch, app):
    """Without X-User-Id the configured dev user id is used."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)

    resp = TestClient(app).get("/me")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == settings.DEV_USER_ID


def test_auth_disabled_honours_x_user_id(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)

    resp = TestClient(app).get("/me", headers={"X-User-Id": str(USER_ID)})
    assert resp.status_code == 200
    assert resp.json()["user_id"] == str(USER_ID)


def test_auth_disabled_rejects_non_uuid_header(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)

    resp = TestClient(app).get("/me", headers={"X-User-Id": "bob"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "X-User-Id must be a UUID"


# ---------------------------------------------------------------------------
# Missing / malformed token
# ---------------------------------------------------------------------------


def test_missing_token_returns_401(monkeypatch, app):
    """A request with no Authorization header should get 401."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    resp = TestClient(app).get("/me")
    assert resp.status_code == 401
    assert "Missing authentication token" in resp.json()["detail"]
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_non_bearer_header_treated_as_missing(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    resp = TestClient(app).get("/me", headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401
    assert "Missing authentication token" in resp.json()["detail"]


def test_expired_token_returns_401(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    with patch("src.middleware.auth._decode_token", side_effect=jwt.ExpiredSignatureError()):
        resp = TestClient(app).get("/me", headers={"Authorization": "Bearer t"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token has expired"


def test_invalid_token_returns_401(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    with patch("src.middleware.auth._decode_token", side_effect=jwt.InvalidTokenError("bad")):
        resp = TestClient(app).get("/me", headers={"Authorization": "Bearer t"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


def test_non_uuid_subject_returns_401(monkeypatch, app):
    """Token subjects must be the UUID of the local user profile."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)
    payload = TokenPayload(sub="service-account-x")

    with patch("src.middleware.auth._decode_token", return_value=payload):
        resp = TestClient(app).get("/me", headers={"Authorization": "Bearer t"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token subject"


def test_valid_token_builds_user_context(monkeypatch, app):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)
    payload = TokenPayload(sub=str(USER_ID), preferred_username="u1", email="u1@example.com")

    with patch("src.middleware.auth._decode_token", return_value=payload):
        resp = TestClient(app).get("/me", headers={"Authorization": "Bearer t"})

    assert resp.status_code == 200
    assert resp.json() == {"user_id": str(USER_ID), "username": "u1"}


# ---------------------------------------------------------------------------
# Access scope dependency
# ---------------------------------------------------------------------------


def test_access_scope_resolved_for_requester(monkeypatch):
    """get_access_scope hands the caller's id to the resolver."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)
    peer = uuid.uuid4()
    resolved = AccessScope(requester_id=USER_ID, related_user_ids=frozenset({USER_ID, peer}))

    app = FastAPI()

    @app.get("/scope")
    async def scope(scope: CurrentScope):
        return {"related": sorted(str(u) for u in scope.related_user_ids)}

    async def fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_db] = fake_db

    with patch(
        "src.middleware.auth.resolve_access_scope", new=AsyncMock(return_value=resolved)
    ) as mock_resolve:
        resp = TestClient(app).get("/scope", headers={"X-User-Id": str(USER_ID)})

    assert resp.status_code == 200
    assert resp.json()["related"] == sorted([str(USER_ID), str(peer)])
    assert mock_resolve.await_args.args[1] == USER_ID
