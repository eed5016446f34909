"""User Schemas: request/response models for registration, login and profile edits.

Invariants:
    - Required string fields reject empty strings (presence check, not format)
    - UserUpdate fields are all optional; at least one is enforced by build_update
    - No response model ever carries the password
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """Sparse profile patch: omitted (or null) fields keep their stored value."""
    username: str | None = Field(None, min_length=1)
    email: str | None = Field(None, min_length=1)
    role: str | None = Field(None, min_length=1)


class UserSummary(BaseModel):
    """Public lookup result for GET /api/users."""
    username: str
    email: str
    role: str


class UserProfile(UserSummary):
    """Login result."""
    id: int
