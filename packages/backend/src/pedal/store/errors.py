"""Typed store failures.

Routes translate these into HTTP errors; services and stores never
build HTTP responses themselves.
"""


class StoreError(Exception):
    """Base class for every store-level failure."""


class NotFoundError(StoreError):
    """Raised when an id/identity does not exist."""


class ConflictError(StoreError):
    """Raised when a unique key (e.g. email) is already taken."""


class InvalidInputError(StoreError):
    """Raised when a required field is missing or malformed."""


class UnauthorizedError(StoreError):
    """Raised when someone other than the owner tries to mutate an entity."""
