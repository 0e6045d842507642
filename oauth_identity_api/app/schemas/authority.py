"""
Pydantic models for authorities (roles and permissions granted to users).
"""

from typing import Optional

from pydantic import BaseModel, Field


class AuthorityRequest(BaseModel):
    id: Optional[int] = Field(None, examples=[3])
    name: str = Field(..., min_length=1, examples=["ROLE_AUDITOR"])
    description: Optional[str] = Field(None, examples=["Read-only access to audit data"])


class AuthorityResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
