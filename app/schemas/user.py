"""
Pydantic schemas for user registration and token issuance.
"""

from pydantic import Field

from app.schemas.base import CamelModel, RequestModel


class UserRegisterRequest(RequestModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class TokenRequest(RequestModel):
    """Request schema for exchanging a username/password for a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """JWT token response."""
    token: str
