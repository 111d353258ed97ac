"""
Bearer token verification.
Tokens are issued by the auth service; this side only checks them.
"""
import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Config
from app.errors import ErrorType
from app.exceptions import AppException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict:
    """Verify a JWT and return its payload.

    Raises:
        AppException: NOT_CONFIGURED without a secret, FORBIDDEN for a bad or expired token
    """
    if not Config.JWT_SECRET:
        logger.error("JWT_SECRET not set for verification!")
        raise AppException(ErrorType.NOT_CONFIGURED, "Internal server configuration error")

    try:
        return jwt.decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise AppException(ErrorType.FORBIDDEN, "Forbidden: Invalid or expired token")


async def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Dependency: any authenticated caller."""
    if credentials is None or not credentials.credentials:
        raise AppException(ErrorType.UNAUTHORIZED, "Unauthorized: No token provided")
    return decode_token(credentials.credentials)


async def verify_admin(user: dict = Depends(verify_token)) -> dict:
    """Dependency: authenticated caller with the admin role."""
    if user.get("role") != "admin":
        logger.warning(f"Non-admin user attempted admin action: {user.get('username', 'unknown')}")
        raise AppException(ErrorType.FORBIDDEN, "Forbidden: Admin privileges required")
    return user
