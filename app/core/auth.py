import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.errors import AppError, ErrorKind
from app.core.security import verify_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Username carried by the bearer token"""
    if credentials is None:
        raise AppError(ErrorKind.UNAUTHORIZED, "Authorization required.")

    payload = verify_token(credentials.credentials)
    username = payload.get("sub") if payload else None
    if not username:
        raise AppError(ErrorKind.UNAUTHORIZED, "Invalid token.")

    return username


async def ensure_correct_user(
    username: str,
    current_username: str = Depends(get_current_username),
) -> str:
    """Only the user named in the path may act on it"""
    if username != current_username:
        logger.warning("User %s tried to access resources of %s", current_username, username)
        raise AppError(ErrorKind.FORBIDDEN, "Cannot access other users' resources.")
    return username
