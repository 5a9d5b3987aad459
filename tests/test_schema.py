"""
Tests for schema validation.
"""

import pytest

from parceltracker.models import Parcel, ParcelStatus
from parceltracker.schema import is_valid_target_status, validate_parcel


class TestValidateParcel:
    """Test parcel validation before insert."""

    def test_valid_parcel(self, sample_parcel):
        """Valid parcel should have no errors."""
        assert validate_parcel(sample_parcel) == []

    def test_defaults_are_valid(self):
        assert validate_parcel(Parcel(client=1)) == []

    @pytest.mark.parametrize("client", ["1000", None, 1.5, True])
    def test_client_must_be_int(self, sample_parcel, client):
        sample_parcel.client = client
        errors = validate_parcel(sample_parcel)
        assert any("client" in err for err in errors)

    @pytest.mark.parametrize("client", [-(2 ** 63), 0, 2 ** 63 - 1])
    def test_client_within_64_bits(self, sample_parcel, client):
        sample_parcel.client = client
        assert validate_parcel(sample_parcel) == []

    @pytest.mark.parametrize("client", [2 ** 63, -(2 ** 63) - 1, 2 ** 64])
    def test_client_out_of_range(self, sample_parcel, client):
        sample_parcel.client = client
        errors = validate_parcel(sample_parcel)
        assert errors == ["Field 'client' must fit in a signed 64-bit integer"]

    def test_unknown_status(self, sample_parcel):
        sample_parcel.status = "lost"
        errors = validate_parcel(sample_parcel)
        assert errors == ["Field 'status' must be one of: registered, sent, delivered"]

    @pytest.mark.parametrize("status", list(ParcelStatus))
    def test_all_lifecycle_statuses_accepted(self, sample_parcel, status):
        sample_parcel.status = status
        assert validate_parcel(sample_parcel) == []

    def test_address_must_be_string(self, sample_parcel):
        sample_parcel.address = 42
        errors = validate_parcel(sample_parcel)
        assert any("address" in err for err in errors)

    def test_empty_address_allowed(self, sample_parcel):
        sample_parcel.address = ""
        assert validate_parcel(sample_parcel) == []

    @pytest.mark.parametrize("created_at", ["", "   ", None])
    def test_created_at_required(self, sample_parcel, created_at):
        sample_parcel.created_at = created_at
        errors = validate_parcel(sample_parcel)
        assert any("non-empty" in err for err in errors)

    def test_created_at_must_be_timestamp(self, sample_parcel):
        sample_parcel.created_at = "yesterday"
        errors = validate_parcel(sample_parcel)
        assert any("ISO 8601" in err for err in errors)

    @pytest.mark.parametrize(
        "created_at",
        [
            "2024-01-31T12:00:00Z",
            "2024-01-31T12:00:00+03:00",
            "2024-01-31 12:00:00",
            "2024-01-31T12:00:00.123456789Z",
            "2024-01-31T12:00:00.5Z",
            "2024-01-31T12:00:00.12345+03:00",
        ],
    )
    def test_timestamp_formats(self, sample_parcel, created_at):
        sample_parcel.created_at = created_at
        assert validate_parcel(sample_parcel) == []

    def test_multiple_errors_reported(self):
        parcel = Parcel(client=None, status="x", address=None, created_at="")
        assert len(validate_parcel(parcel)) == 4


class TestTargetStatus:
    """Statuses that set_status may write."""

    @pytest.mark.parametrize("status", ["sent", "delivered", ParcelStatus.DELIVERED])
    def test_valid_targets(self, status):
        assert is_valid_target_status(status)

    @pytest.mark.parametrize("status", ["registered", ParcelStatus.REGISTERED, "Sent", "", None, 1])
    def test_invalid_targets(self, status):
        assert not is_valid_target_status(status)
