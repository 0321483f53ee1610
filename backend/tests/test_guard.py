"""Tests for the authorization guard — three distinct outcomes."""
import pytest

from menux.errors import Forbidden, TransportError, Unauthenticated
from menux.services import access_service
from menux.services.guard import AccessState, access_status, authorize
from menux.services.identity_provider import AuthSession
from tests.conftest import auth_headers, create_admin, create_test_user


def _session(user_id="u1", email="u1@bar.com"):
    return AuthSession(session_id="s-1", user_id=user_id, email=email, expires_at=2**31)


class TestAuthorize:
    """authorize(db, session) with an explicit session, no identity provider."""

    def test_absent_session_unauthenticated_regardless_of_roles(self, db):
        access_service.set_role(db, "u1", "admin")
        with pytest.raises(Unauthenticated):
            authorize(db, None)

    def test_absent_session_never_touches_store(self, broken_db):
        with pytest.raises(Unauthenticated):
            authorize(broken_db, None)

    def test_no_role_row_forbidden(self, db):
        with pytest.raises(Forbidden):
            authorize(db, _session())

    def test_user_role_forbidden(self, db):
        access_service.set_role(db, "u1", "user")
        with pytest.raises(Forbidden):
            authorize(db, _session())

    def test_admin_role_authorized(self, db):
        access_service.set_role(db, "u1", "admin")
        session = _session()
        assert authorize(db, session) is session

    def test_other_identity_admin_does_not_leak(self, db):
        access_service.set_role(db, "u2", "admin")
        with pytest.raises(Forbidden):
            authorize(db, _session())

    def test_store_failure_is_transport_not_denial(self, broken_db):
        with pytest.raises(TransportError) as exc_info:
            authorize(broken_db, _session())
        assert not isinstance(exc_info.value, Forbidden)

    def test_demotion_revokes_authorization(self, db):
        access_service.set_role(db, "u1", "admin")
        authorize(db, _session())
        access_service.set_role(db, "u1", "user")
        with pytest.raises(Forbidden):
            authorize(db, _session())


class TestAccessStatus:
    """access_status reports denials without raising."""

    def test_states(self, db):
        assert access_status(db, None) == AccessState.unauthenticated
        assert access_status(db, _session()) == AccessState.forbidden
        access_service.set_role(db, "u1", "admin")
        assert access_status(db, _session()) == AccessState.authorized

    def test_store_failure_still_raises(self, broken_db):
        with pytest.raises(TransportError):
            access_status(broken_db, _session())


class TestGuardOverHTTP:
    """require_admin maps each outcome to its own status code."""

    def test_unknown_token_is_unauthenticated(self, client):
        resp = client.get("/api/user-roles/", headers={"Authorization": "Bearer not-a-session"})
        assert resp.status_code == 401

    def test_signed_out_token_is_unauthenticated(self, client, db):
        headers = create_admin(client, db)
        assert client.get("/api/user-roles/", headers=headers).status_code == 200
        assert client.post("/api/auth/sign-out", headers=headers).status_code == 204
        assert client.get("/api/user-roles/", headers=headers).status_code == 401

    def test_store_failure_is_503(self, client, broken_db):
        from menux.database import get_db
        from menux.main import app

        create_test_user(client, email="user@bar.com")
        headers = auth_headers(client, "user@bar.com")
        app.dependency_overrides[get_db] = lambda: broken_db

        resp = client.get("/api/user-roles/", headers=headers)
        assert resp.status_code == 503
        assert resp.json()["kind"] == "transport_error"

    def test_access_endpoint(self, client, db):
        assert client.get("/api/auth/access").json() == {"state": "unauthenticated"}
        create_test_user(client, email="user@bar.com")
        user_headers = auth_headers(client, "user@bar.com")
        assert client.get("/api/auth/access", headers=user_headers).json() == {"state": "forbidden"}
        admin_headers = create_admin(client, db)
        assert client.get("/api/auth/access", headers=admin_headers).json() == {"state": "authorized"}
