"""
CRUD operations for User model.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.models.user import User
from app.schemas.user import UserRegisterRequest


def get_by_username(db: Session, username: str) -> Optional[User]:
    """
    Retrieve a user by username.

    Returns:
        User instance if found, None otherwise
    """
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid username/password")
    return user


def register(db: Session, data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    if get_by_username(db, data.username):
        raise BadRequestError(f"Duplicate username: {data.username}")

    user = User(
        username=data.username,
        hashed_password=get_password_hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return user
