"""
Parcel record and lifecycle status.

Status flow:
    REGISTERED → SENT
    REGISTERED → DELIVERED
Only a registered parcel may be edited or deleted.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone


class ParcelStatus(str, enum.Enum):
    """Lifecycle status of a parcel."""

    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"


# Statuses that set_status may write.
TARGET_STATUSES = (ParcelStatus.SENT, ParcelStatus.DELIVERED)


def utc_timestamp() -> str:
    """Current UTC time as an RFC 3339 string, e.g. 2024-01-31T12:00:00Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Parcel:
    """
    One shipment record.

    `number` is 0 until the store assigns one.
    """

    client: int
    status: str = ParcelStatus.REGISTERED.value
    address: str = ""
    created_at: str = field(default_factory=utc_timestamp)
    number: int = 0
