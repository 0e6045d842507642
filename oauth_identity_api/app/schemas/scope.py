"""
Pydantic models for OAuth scopes.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ScopeRequest(BaseModel):
    id: Optional[int] = Field(None, examples=[3])
    name: str = Field(..., min_length=1, examples=["profile"])
    description: Optional[str] = Field(None, examples=["Access to the user's profile"])


class ScopeResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
