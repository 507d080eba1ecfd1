"""
Session token utilities.
Signs and verifies JWTs carrying the user's email and role claim.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from estatehub.config import settings


class TokenClaims:
    """Verified JWT payload."""

    def __init__(self, email: str, role: Optional[str], expires_at: datetime):
        self.email = email
        self.role = role
        self.expires_at = expires_at

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenClaims":
        """Create TokenClaims from a decoded payload."""
        return cls(
            email=data["email"],
            role=data.get("role"),
            expires_at=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )

    def __repr__(self) -> str:
        return f"<TokenClaims(email={self.email}, role={self.role})>"


def create_access_token(
    email: str,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session token.

    Args:
        email: Identity embedded in the token
        role: Role claim, informational only; guards re-read the stored role
        expires_delta: Optional custom lifetime, defaults to TOKEN_EXPIRE_DAYS

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.token_expire_days)

    to_encode = {
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenClaims:
    """
    Verify and decode a session token.

    Args:
        token: JWT token string

    Returns:
        TokenClaims of a valid token

    Raises:
        ExpiredSignatureError: If the token has expired
        JWTError: If the token is malformed, badly signed or lacks an email
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    if not payload.get("email") or "exp" not in payload:
        raise JWTError("Invalid token payload")

    return TokenClaims.from_dict(payload)


def is_expired_error(error: JWTError) -> bool:
    return isinstance(error, ExpiredSignatureError)


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an `Authorization: Bearer <token>` header value.

    Returns:
        The token, or None when the header is missing
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        # A present but malformed header is an invalid credential, not a missing one
        return ""
    return parts[1]
