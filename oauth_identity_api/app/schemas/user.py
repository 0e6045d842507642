"""
Pydantic models for user data.

``UserRequest`` is the inbound shape used by create-or-update: a request
without ``id`` creates a user, a request with ``id`` updates that user's
password.  ``UserResponse`` never carries the password.
``SearchUserRequest`` holds the optional filters for listing users.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserRequest(BaseModel):
    id: Optional[int] = Field(None, examples=[1])
    username: str = Field(..., min_length=1, examples=["alice"])
    password: str = Field(..., min_length=1, examples=["pw123"])
    email: Optional[str] = Field(None, examples=["alice@example.com"])
    enabled: bool = Field(True, examples=[True])


class UserResponse(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    username: str
    email: Optional[str] = None
    enabled: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class SearchUserRequest(BaseModel):
    """Filters for listing users.

    ``username`` matches as a case-insensitive substring, ``email``
    exactly.  Omitted fields do not filter.
    """

    username: Optional[str] = None
    email: Optional[str] = None
    enabled: Optional[bool] = None
