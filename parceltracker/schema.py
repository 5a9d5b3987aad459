import re
from datetime import datetime
from typing import Any, List

from .models import Parcel, ParcelStatus, TARGET_STATUSES

STATUS_VALUES = [s.value for s in ParcelStatus]

# SQLite INTEGER is a signed 64-bit value
CLIENT_MIN = -(2 ** 63)
CLIENT_MAX = 2 ** 63 - 1

_FRACTION = re.compile(r"\.(\d+)")


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _valid_timestamp(v: str) -> bool:
    # Before Python 3.11 fromisoformat wants exactly 3 or 6 fraction digits
    # and no trailing "Z"; RFC 3339 allows any precision (e.g. nanoseconds).
    v = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), v, count=1)
    try:
        datetime.fromisoformat(v.replace("Z", "+00:00"))
        return True
    except ValueError:
        return False


def is_valid_target_status(status: Any) -> bool:
    """True if set_status may write this status."""
    return any(status == s.value for s in TARGET_STATUSES)


def validate_parcel(parcel: Parcel) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    if not _is_int(parcel.client):
        errors.append("Field 'client' must be an integer")
    elif not CLIENT_MIN <= parcel.client <= CLIENT_MAX:
        errors.append("Field 'client' must fit in a signed 64-bit integer")

    if parcel.status not in STATUS_VALUES:
        errors.append(
            f"Field 'status' must be one of: {', '.join(STATUS_VALUES)}"
        )

    if not isinstance(parcel.address, str):
        errors.append("Field 'address' must be a string")

    created_at = parcel.created_at
    if not isinstance(created_at, str) or not created_at.strip():
        errors.append("Field 'created_at' must be a non-empty string")
    elif not _valid_timestamp(created_at):
        errors.append("Field 'created_at' must be an ISO 8601 timestamp")

    return errors
