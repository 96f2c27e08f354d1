"""Tests for bearer-token verification and role gates."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt
from shared.auth import Actor, admin_only, admin_or_employee, create_access_token, decode_access_token, get_current_actor
from shared.config import get_settings
from shared.exceptions import AuthenticationError, Forbidden


class TestTokens:
    def test_round_trip_keeps_identity_and_role(self):
        token = create_access_token(Actor(id="admin-1", role="admin", name="Store Admin"))

        actor = decode_access_token(token)

        assert actor == Actor(id="admin-1", role="admin", name="Store Admin")
        assert actor.is_admin and actor.is_staff

    def test_expired_token_is_rejected(self):
        token = create_access_token(Actor(id="user-1"), expires_minutes=-1)

        with pytest.raises(AuthenticationError) as exc:
            decode_access_token(token)
        assert exc.value.message == "Token is not valid."

    def test_token_signed_with_another_secret_is_rejected(self):
        token = jwt.encode(
            {"id": "user-1", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "some-other-secret",
            algorithm=get_settings().jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_token_without_subject_is_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"role": "admin", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(token)


class TestCurrentActor:
    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer "])
    def test_missing_or_malformed_header(self, header):
        with pytest.raises(AuthenticationError) as exc:
            get_current_actor(header)
        assert exc.value.message == "Access denied. No token provided."

    def test_bearer_header(self):
        token = create_access_token(Actor(id="user-1"))
        assert get_current_actor(f"Bearer {token}").id == "user-1"


class TestRoleGates:
    def test_admin_only(self):
        assert admin_only(Actor(id="a", role="admin")).id == "a"
        with pytest.raises(Forbidden) as exc:
            admin_only(Actor(id="e", role="employee"))
        assert exc.value.message == "Access denied. employee role is not authorized to access this resource."

    def test_admin_or_employee(self):
        assert admin_or_employee(Actor(id="e", role="employee")).id == "e"
        with pytest.raises(Forbidden):
            admin_or_employee(Actor(id="u", role="user"))
