"""
Error types raised by the service layer.

Services raise these synchronously at the point of detection and never
swallow them.  The HTTP layer maps ``NotFoundError`` to 404 and
``ConflictError`` to 409.
"""


class ServiceError(Exception):
    """Base class for expected business failures."""


class NotFoundError(ServiceError):
    """A required entity does not exist."""


class ConflictError(ServiceError):
    """A write would violate a uniqueness constraint."""
