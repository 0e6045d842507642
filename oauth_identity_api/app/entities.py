"""
Persisted entity types.

Entities mirror the rows stored by the repositories.  They are plain
dataclasses, separate from the pydantic request/response schemas, so
that persistence details (such as the password hash) never leak into
the API representation.  An ``id`` of ``None`` marks an entity the
store has not assigned an identifier to yet.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    id: Optional[int] = None
    username: Optional[str] = None
    # Always a hash produced by ``core.security.hash_password`` once saved.
    password: Optional[str] = None
    email: Optional[str] = None
    enabled: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Authority:
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Scope:
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
