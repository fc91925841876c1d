import secrets

import structlog
from fastapi import Depends, status, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config.config import config

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> bool:
    """
    Guard the assistant routes with API_TOKEN when one is configured.

    Returns:
        True when the request may proceed

    Raises:
        HTTPException: 401 if the bearer token is missing or wrong
    """
    expected = config.api_token
    if not expected:
        return True

    if credentials is None:
        raise _unauthorized("Authentication required. Please provide a valid Bearer token.")

    # Constant-time comparison of the UTF-8 bytes
    if not secrets.compare_digest(credentials.credentials.encode(), expected.encode()):
        logger.warning("Rejected request with invalid API token")
        raise _unauthorized("Invalid authentication token.")

    return True
