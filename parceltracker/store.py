"""
Parcel store.

Responsibilities:
- CRUD operations for the parcel table.
- Lifecycle checks: only a registered parcel may change address or
  status, or be deleted.

Each status check is part of the UPDATE/DELETE statement itself, so the
check and the write happen atomically in the database.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import ParcelRow
from .errors import NotFoundError, PersistenceError, StateError, ValidationError
from .logger import StructuredLogger, get_logger
from .models import Parcel, ParcelStatus
from .schema import is_valid_target_status, validate_parcel

REGISTERED = ParcelStatus.REGISTERED.value

# sqlite3 raises a bare OverflowError for ints outside the 64-bit range
DB_ERRORS = (SQLAlchemyError, OverflowError)

REFUSED_ACTIONS = {
    "set_status": "change status of",
    "set_address": "change address of",
    "delete": "delete",
}


class ParcelStore:
    """Data access for parcels, bound to a caller-owned SQLAlchemy session."""

    def __init__(self, session: Session, logger: Optional[StructuredLogger] = None):
        self._session = session
        self._logger = logger or get_logger()

    def add(self, parcel: Parcel) -> int:
        """
        Persist a new parcel.

        Returns:
            The number assigned to the parcel. `parcel` itself is not modified.
        """
        self._logger.record_operation("add")
        errors = validate_parcel(parcel)
        if errors:
            self._logger.record_failure("add", "ValidationError")
            self._logger.warning("Rejected invalid parcel", errors=errors)
            raise ValidationError("Invalid parcel: " + "; ".join(errors), errors)

        row = ParcelRow(
            client=parcel.client,
            status=ParcelStatus(parcel.status).value,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        try:
            self._session.add(row)
            self._session.flush()
            number = row.number
            self._session.commit()
        except DB_ERRORS as e:
            self._fail("add", e)

        self._logger.info("Parcel added", number=number, client=parcel.client)
        return number

    def get(self, number: int) -> Parcel:
        """Return the parcel with this number or raise NotFoundError."""
        self._logger.record_operation("get")
        try:
            row = self._session.query(ParcelRow).filter_by(number=number).first()
        except DB_ERRORS as e:
            self._fail("get", e)

        if row is None:
            self._logger.record_failure("get", "NotFoundError")
            raise NotFoundError(number)
        self._logger.debug("Parcel loaded", number=number)
        return row.to_parcel()

    def get_by_client(self, client: int) -> List[Parcel]:
        """Return every parcel of a client; empty list if there are none."""
        self._logger.record_operation("get_by_client")
        try:
            rows = (
                self._session.query(ParcelRow)
                .filter_by(client=client)
                .order_by(ParcelRow.number)
                .all()
            )
        except DB_ERRORS as e:
            self._fail("get_by_client", e)

        self._logger.debug("Parcels loaded", client=client, count=len(rows))
        return [row.to_parcel() for row in rows]

    def set_status(self, number: int, status: str) -> None:
        """
        Move a registered parcel to `sent` or `delivered`.

        Raises:
            ValidationError: status is not sent or delivered
            StateError: the parcel is no longer registered
            NotFoundError: no such parcel
        """
        self._logger.record_operation("set_status")
        if not is_valid_target_status(status):
            self._logger.record_failure("set_status", "ValidationError")
            raise ValidationError(f"Cannot change status to '{status}'")

        self._update_registered(
            "set_status", number, {"status": ParcelStatus(status).value}
        )
        self._logger.info("Parcel status changed", number=number, status=status)

    def set_address(self, number: int, address: str) -> None:
        """Change the address of a registered parcel."""
        self._logger.record_operation("set_address")
        if not isinstance(address, str):
            self._logger.record_failure("set_address", "ValidationError")
            raise ValidationError("Field 'address' must be a string")

        self._update_registered("set_address", number, {"address": address})
        self._logger.info("Parcel address changed", number=number)

    def delete(self, number: int) -> None:
        """Delete a registered parcel."""
        self._logger.record_operation("delete")
        try:
            deleted = (
                self._session.query(ParcelRow)
                .filter_by(number=number, status=REGISTERED)
                .delete(synchronize_session=False)
            )
            self._session.commit()
        except DB_ERRORS as e:
            self._fail("delete", e)

        if deleted == 0:
            self._refuse("delete", number)
        self._logger.info("Parcel deleted", number=number)

    def _update_registered(self, operation: str, number: int, values: dict) -> None:
        try:
            updated = (
                self._session.query(ParcelRow)
                .filter_by(number=number, status=REGISTERED)
                .update(values, synchronize_session=False)
            )
            self._session.commit()
        except DB_ERRORS as e:
            self._fail(operation, e)

        if updated == 0:
            self._refuse(operation, number)

    def _refuse(self, operation: str, number: int):
        """Raise NotFoundError or StateError for a conditional write that matched no row."""
        try:
            status = (
                self._session.query(ParcelRow.status)
                .filter_by(number=number)
                .scalar()
            )
        except DB_ERRORS as e:
            self._fail(operation, e)

        if status is None:
            self._logger.record_failure(operation, "NotFoundError")
            raise NotFoundError(number)

        self._logger.record_failure(operation, "StateError")
        self._logger.warning(
            "Parcel change refused", operation=operation, number=number, status=status
        )
        raise StateError(number, status, REFUSED_ACTIONS[operation])

    def _fail(self, operation: str, error: Exception):
        self._session.rollback()
        self._logger.record_failure(operation, "PersistenceError")
        self._logger.error(
            f"Database error during {operation}: {error}",
            operation=operation,
            error_type=type(error).__name__,
        )
        raise PersistenceError(f"{operation} failed: {error}") from error
