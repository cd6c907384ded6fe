"""
Authentication endpoints.

- POST /token: exchange username/password for a JWT
- POST /register: create a (non-admin) user and return a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.user import TokenRequest, TokenResponse, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _token_for(user: User) -> str:
    return create_access_token(data={"sub": user.username, "is_admin": user.is_admin})


@router.post("/token", response_model=TokenResponse)
def login(
    request: TokenRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT.

    The token carries the username and admin flag; send it back as
    `Authorization: Bearer <token>`.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user.username}")
    return TokenResponse(token=_token_for(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new (non-admin) user and return a JWT for immediate use.
    """
    user = user_crud.register(db, request)
    logger.info(f"New user registered: {user.username}")
    return TokenResponse(token=_token_for(user))
