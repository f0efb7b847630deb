import uuid

import pytest
import requests
from fastapi.testclient import TestClient

from loyalty_ledger.db import get_db
from loyalty_ledger.deps import auth
from loyalty_ledger.deps.auth import Caller, get_caller, resolve_caller
from loyalty_ledger.errors import InternalError, Unauthorized
from loyalty_ledger.main import app


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def provider(monkeypatch):
    calls = []
    state = {"response": FakeResponse(401)}

    def fake_get(url, headers=None, timeout=None):
        calls.append({"url": url, "headers": headers, "timeout": timeout})
        response = state["response"]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(auth, "IDENTITY_PROVIDER_URL", "https://id.example.com")
    monkeypatch.setattr(auth, "IDENTITY_PROVIDER_API_KEY", "anon-key")
    monkeypatch.setattr(auth.requests, "get", fake_get)
    return state, calls


class TestResolveCaller:

    def test_valid_token(self, provider):
        state, calls = provider
        user_id = uuid.uuid4()
        state["response"] = FakeResponse(200, {"id": str(user_id), "email": "m@example.com"})

        caller = resolve_caller("token-123")

        assert caller == Caller(id=user_id, email="m@example.com")
        assert calls[0]["url"] == "https://id.example.com/auth/v1/user"
        assert calls[0]["headers"]["Authorization"] == "Bearer token-123"
        assert calls[0]["headers"]["apikey"] == "anon-key"

    def test_rejected_token(self, provider):
        state, _ = provider
        state["response"] = FakeResponse(401, {"msg": "invalid JWT"})

        with pytest.raises(Unauthorized):
            resolve_caller("expired")

    def test_garbage_identity(self, provider):
        state, _ = provider
        state["response"] = FakeResponse(200, {"id": "not-a-uuid"})

        with pytest.raises(Unauthorized):
            resolve_caller("token")

    def test_non_json_body(self, provider):
        state, _ = provider
        state["response"] = FakeResponse(200)

        with pytest.raises(Unauthorized):
            resolve_caller("token")

    def test_provider_unreachable(self, provider):
        state, _ = provider
        state["response"] = requests.ConnectionError("connection refused")

        with pytest.raises(Unauthorized):
            resolve_caller("token")

    def test_provider_not_configured(self, monkeypatch):
        monkeypatch.setattr(auth, "IDENTITY_PROVIDER_URL", "")

        with pytest.raises(InternalError):
            resolve_caller("token")


class TestGetCaller:

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "token-only"])
    def test_bad_header(self, header):
        with pytest.raises(Unauthorized):
            get_caller(header)

    def test_bearer_header(self, provider):
        state, calls = provider
        user_id = uuid.uuid4()
        state["response"] = FakeResponse(200, {"id": str(user_id)})

        caller = get_caller("Bearer abc.def")

        assert caller.id == user_id
        assert caller.email is None
        assert calls[0]["headers"]["Authorization"] == "Bearer abc.def"


class TestAuthOverHttp:

    def test_request_with_valid_token(self, provider, session_factory):
        state, _ = provider
        state["response"] = FakeResponse(200, {"id": str(uuid.uuid4())})

        def override_get_db():
            session = session_factory()
            try:
                yield session
            finally:
                session.close()

        app.dependency_overrides[get_db] = override_get_db
        try:
            r = TestClient(app).get("/loyalty-levels-api", headers={"Authorization": "Bearer good"})
        finally:
            app.dependency_overrides.clear()

        assert r.status_code == 200
        assert r.json() == {"data": []}

    def test_request_with_rejected_token(self, provider):
        r = TestClient(app).get("/rewards-api", headers={"Authorization": "Bearer bad"})

        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized"}
