"""
Security helpers for password hashing and API access control.

Passwords are hashed with PBKDF2-HMAC over SHA-256 using a random
16-byte salt.  The stored string embeds the iteration count, the salt
and the derived key, separated by ``$``, so the work factor can be
raised later without invalidating existing hashes.

Management routes are guarded by a static bearer token taken from
``settings.admin_token``.
"""

import hashlib
import hmac
import logging
import os
from typing import Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


logger = logging.getLogger(__name__)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        PBKDF2 iteration count.  Defaults to
        ``settings.password_hash_iterations``.

    Returns
    -------
    str
        ``"<iterations>$<salt hex>$<hash hex>"``.  Two calls with the
        same password return different strings because the salt is
        random.
    """
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a string produced by ``hash_password``.

    Malformed hashes never match.
    """
    try:
        iterations_str, salt_hex, hash_hex = hashed_password.split("$", 2)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        iterations = int(iterations_str)
    except (AttributeError, ValueError):
        return False
    if iterations < 1:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def require_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Dict[str, str]:
    """Dependency that admits callers presenting ``settings.admin_token``.

    When no admin token is configured every request is admitted as an
    anonymous administrator.  Otherwise a missing header yields 401 and a
    wrong token yields 403.
    """
    if not settings.admin_token:
        return {"sub": "anonymous"}
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    presented = credentials.credentials.encode("utf-8")
    if not hmac.compare_digest(presented, settings.admin_token.encode("utf-8")):
        logger.warning("Rejected request with invalid admin token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return {"sub": "admin"}
