"""
Application package initializer.

Management of users, authorities and scopes for an OAuth identity
backend.  Each domain has its own schema, mapper, repository and
service module, and exposes a router defined in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
