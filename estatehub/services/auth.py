"""
Authentication service for session tokens and role guards.
Issues tokens for an identity and checks roles against the stored user record.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.user import UserRepository
from estatehub.models.user import UserRole
from estatehub.utils.auth import (
    TokenClaims,
    create_access_token,
    verify_token,
    is_expired_error,
)
from estatehub.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)
from jose import JWTError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for token issuance, verification and role guards.
    The role claim inside a token is never used for authorization; every guard
    re-reads the user's stored role.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    def issue_token(self, email: str, role: Optional[UserRole] = None) -> str:
        """
        Issue a session token for an identity.

        Args:
            email: Identity to embed
            role: Optional role claim

        Returns:
            Signed JWT
        """
        token = create_access_token(email, role.value if role else None)
        logger.info(f"Issued session token for {email}")
        return token

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify a bearer credential.

        Args:
            token: Raw token from the Authorization header; None when absent

        Returns:
            Claims of a valid token

        Raises:
            UnauthorizedError: If no credential was sent
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        if token is None:
            raise UnauthorizedError()

        if not token:
            raise InvalidTokenError()

        try:
            return verify_token(token)
        except JWTError as e:
            if is_expired_error(e):
                logger.debug("Rejected expired token")
                raise TokenExpiredError()
            logger.debug(f"Rejected invalid token: {e}")
            raise InvalidTokenError()

    async def require_role(self, claims: TokenClaims, role: UserRole) -> TokenClaims:
        """
        Check that the caller's stored role is `role`.

        Args:
            claims: Verified token claims
            role: Required role

        Returns:
            The same claims, for chaining in dependencies

        Raises:
            InsufficientPermissionsError: If the stored role differs or the user does not exist
        """
        stored_role = await self.user_repo.get_role_by_email(claims.email)

        if stored_role != role:
            logger.warning(
                f"Role check failed for {claims.email}: required {role.value}, "
                f"stored {stored_role.value if stored_role else 'none'}"
            )
            raise InsufficientPermissionsError(role.value)

        return claims
