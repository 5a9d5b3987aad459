"""
Error kinds raised by the parcel store.

Low-level SQLAlchemy errors are wrapped in PersistenceError so callers only
need to handle this hierarchy.
"""

from typing import List, Optional


class ParcelStoreError(Exception):
    """Base class for parcel store errors."""
    pass


class NotFoundError(ParcelStoreError):
    """Raised when no parcel exists with the requested number."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Parcel {number} not found")


class ValidationError(ParcelStoreError):
    """Raised when a parcel or a requested status fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or [message]
        super().__init__(message)


class StateError(ParcelStoreError):
    """Raised when a mutation is not allowed in the parcel's current status."""

    def __init__(self, number: int, status: str, action: str):
        self.number = number
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action} parcel {number} with status '{status}'")


class PersistenceError(ParcelStoreError):
    """Raised when the underlying database operation fails."""
    pass
