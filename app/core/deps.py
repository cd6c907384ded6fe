"""
FastAPI dependencies for authentication and authorization.

Read routes are open; create/update/delete routes depend on get_admin_user.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token
from app.crud import user as user_crud
from app.models.user import User

# HTTP Bearer token scheme (Authorization: Bearer <token>).
# auto_error is off so a missing header becomes our own 401.
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired,
            or names a user that no longer exists
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")

    username = payload.get("sub")
    if username is None:
        raise UnauthorizedError("Could not validate credentials")

    user = user_crud.get_by_username(db, username)
    if user is None:
        raise UnauthorizedError("Could not validate credentials")

    return user


def get_admin_user(user: User = Depends(get_current_user)) -> User:
    """
    Require the current user to be an admin.

    Raises:
        UnauthorizedError: If the user is not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError("Admin privileges required")
    return user
