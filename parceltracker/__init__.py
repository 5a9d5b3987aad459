"""Parcel tracker: SQLite-backed storage for shipment records."""

from .errors import (
    NotFoundError,
    ParcelStoreError,
    PersistenceError,
    StateError,
    ValidationError,
)
from .models import Parcel, ParcelStatus
from .store import ParcelStore

__version__ = "0.1.0"

__all__ = [
    "Parcel",
    "ParcelStatus",
    "ParcelStore",
    "ParcelStoreError",
    "NotFoundError",
    "ValidationError",
    "StateError",
    "PersistenceError",
]
