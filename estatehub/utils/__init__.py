"""
Utility modules for the EstateHub API.
"""

from .auth import (
    create_access_token,
    verify_token,
    extract_token_from_header,
    TokenClaims
)

from .exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    InternalServerError,
    UpstreamServiceError,
    TokenExpiredError,
    InvalidTokenError,
    InsufficientPermissionsError,
    DuplicateResourceError,
    OfferTransitionError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "extract_token_from_header",
    "TokenClaims",

    # Exceptions
    "APIException",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "InternalServerError",
    "UpstreamServiceError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "DuplicateResourceError",
    "OfferTransitionError",
]
