"""
Tests for session tokens and role guards.
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient
from jose import ExpiredSignatureError, JWTError, jwt

from estatehub.config import settings
from estatehub.models.user import User, UserRole
from estatehub.services.auth import AuthService
from estatehub.utils.auth import create_access_token, verify_token, extract_token_from_header
from estatehub.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError
)
from tests.conftest import auth_headers


class TestTokenUtilities:
    """Test JWT creation and verification."""

    def test_token_round_trip(self):
        token = create_access_token("agent@example.com", "agent")

        claims = verify_token(token)

        assert claims.email == "agent@example.com"
        assert claims.role == "agent"

    def test_token_expires_after_thirty_days(self):
        token = create_access_token("buyer@example.com")
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])

        assert payload["exp"] - payload["iat"] == 30 * 24 * 60 * 60

    def test_expired_token_rejected(self):
        token = create_access_token("buyer@example.com", expires_delta=timedelta(seconds=-1))

        with pytest.raises(ExpiredSignatureError):
            verify_token(token)

    def test_token_signed_with_other_key_rejected(self):
        token = jwt.encode({"email": "buyer@example.com", "exp": 9999999999}, "x" * 40, algorithm="HS256")

        with pytest.raises(JWTError):
            verify_token(token)

    def test_token_without_email_rejected(self):
        token = jwt.encode({"exp": 9999999999}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

        with pytest.raises(JWTError):
            verify_token(token)

    @pytest.mark.parametrize("header,expected", [
        (None, None),
        ("", None),
        ("Bearer abc.def", "abc.def"),
        ("bearer abc.def", "abc.def"),
        ("Token abc.def", ""),
        ("Bearer", ""),
    ])
    def test_extract_token_from_header(self, header, expected):
        assert extract_token_from_header(header) == expected


class TestAuthService:
    """Test AuthService verification and guards."""

    async def test_verify_missing_credential(self, db_session):
        with pytest.raises(UnauthorizedError):
            AuthService(db_session).verify(None)

    async def test_verify_malformed_credential(self, db_session):
        with pytest.raises(InvalidTokenError):
            AuthService(db_session).verify("not-a-jwt")

    async def test_verify_expired_credential(self, db_session):
        token = create_access_token("buyer@example.com", expires_delta=timedelta(seconds=-1))

        with pytest.raises(TokenExpiredError) as exc_info:
            AuthService(db_session).verify(token)
        assert exc_info.value.status_code == 403

    async def test_issue_token_embeds_role(self, db_session):
        token = AuthService(db_session).issue_token("agent@example.com", UserRole.AGENT)

        assert verify_token(token).role == "agent"

    async def test_require_role_reads_stored_role(self, db_session, test_admin: User):
        service = AuthService(db_session)
        claims = verify_token(create_access_token(test_admin.email, "user"))

        assert await service.require_role(claims, UserRole.ADMIN) is claims

    async def test_require_role_ignores_role_claim(self, db_session, test_buyer: User):
        service = AuthService(db_session)
        claims = verify_token(create_access_token(test_buyer.email, "admin"))

        with pytest.raises(InsufficientPermissionsError, match="forbidden: admin only"):
            await service.require_role(claims, UserRole.ADMIN)

    async def test_require_role_unknown_user(self, db_session):
        claims = verify_token(create_access_token("ghost@example.com", "agent"))

        with pytest.raises(InsufficientPermissionsError):
            await AuthService(db_session).require_role(claims, UserRole.AGENT)


class TestAuthenticationEndpoints:
    """Test token issuance and credential handling over HTTP."""

    async def test_issue_token(self, async_client: AsyncClient):
        response = await async_client.post("/jwt", json={"email": "buyer@example.com", "role": "user"})

        assert response.status_code == 200
        assert verify_token(response.json()["token"]).email == "buyer@example.com"

    async def test_issue_token_requires_email(self, async_client: AsyncClient):
        response = await async_client.post("/jwt", json={"role": "user"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_missing_credential(self, async_client: AsyncClient):
        response = await async_client.get("/users")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_invalid_credential(self, async_client: AsyncClient):
        response = await async_client.get("/users", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 403

    async def test_non_bearer_credential(self, async_client: AsyncClient):
        response = await async_client.get("/users", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 403

    async def test_expired_credential(self, async_client: AsyncClient):
        token = create_access_token("buyer@example.com", expires_delta=timedelta(seconds=-1))

        response = await async_client.get("/users", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    async def test_admin_guard_rejects_regular_user(self, async_client: AsyncClient, test_buyer: User):
        response = await async_client.patch(
            f"/users/admin/{test_buyer.id}",
            headers=auth_headers(test_buyer.email, "admin")
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "forbidden: admin only"

    async def test_agent_guard_rejects_admin(self, async_client: AsyncClient, test_admin: User):
        response = await async_client.get(
            f"/agent-sold-properties/{test_admin.email}",
            headers=auth_headers(test_admin.email)
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "forbidden: agent only"

    async def test_guard_follows_role_change(self, async_client: AsyncClient, test_admin: User, test_buyer: User):
        headers = auth_headers(test_buyer.email)
        before = await async_client.get("/agent-sold-properties/buyer@example.com", headers=headers)

        promote = await async_client.patch(f"/users/agent/{test_buyer.id}", headers=auth_headers(test_admin.email))
        after = await async_client.get("/agent-sold-properties/buyer@example.com", headers=headers)

        assert before.status_code == 403
        assert promote.status_code == 200
        assert after.status_code == 200
