"""
Unit tests for bulk vehicle import.

Run: pytest tests/unit/test_vehicle_import_service.py -v
"""

import pytest
from datetime import date
from unittest.mock import MagicMock

from models.trip_import import ImportStatus
from models.vehicle import VehicleType, VehicleStatus
from models.vehicle_import import RawVehicleRow
from services.vehicle_import_service import (
    VehicleImportService,
    build_vehicle_records,
    normalize_vehicle_type,
    parse_year,
    validate_vehicle_row,
    MSG_PLATE_EMPTY,
    MSG_TYPE_INVALID,
    MSG_MODEL_EMPTY,
    MSG_YEAR_INVALID,
)
from exceptions import (
    DatabaseError,
    ImportPreviewNotFoundError,
    NothingToImportError,
    VehicleImportCommitError,
)

TODAY = date(2025, 6, 1)


def make_row(plate="RLJ7B45", type="cavalo", model="VOLVO FH 540", year="2020", equipment="Thermo King", row_index=1):
    return RawVehicleRow(
        plate=plate,
        type=type,
        model=model,
        year=year,
        equipment=equipment,
        row_index=row_index,
    )


class TestNormalizeVehicleType:
    """Tests for normalize_vehicle_type()"""

    def test_known_types(self):
        assert normalize_vehicle_type("cavalo") == VehicleType.CAVALO
        assert normalize_vehicle_type("3/4") == VehicleType.TRES_QUARTOS

    def test_case_insensitive(self):
        assert normalize_vehicle_type(" TRUCK ") == VehicleType.TRUCK

    def test_unknown_type(self):
        assert normalize_vehicle_type("moto") is None


class TestParseYear:
    """Tests for parse_year()"""

    def test_valid_year(self):
        assert parse_year("2020", TODAY) == 2020

    def test_next_year_allowed(self):
        assert parse_year("2026", TODAY) == 2026

    def test_out_of_range(self):
        assert parse_year("1899", TODAY) is None
        assert parse_year("2027", TODAY) is None

    def test_not_a_number(self):
        assert parse_year("dois mil", TODAY) is None
        assert parse_year("", TODAY) is None


class TestValidateVehicleRow:
    """Tests for validate_vehicle_row()"""

    def test_valid_row(self):
        result = validate_vehicle_row(make_row(), TODAY)

        assert result.status == ImportStatus.VALID
        assert result.parsed_year == 2020
        assert result.parsed_type == "cavalo"

    def test_all_errors_reported(self):
        result = validate_vehicle_row(make_row(plate="", type="moto", model="", year="x"), TODAY)

        assert result.status == ImportStatus.ERROR
        assert result.message.startswith(MSG_PLATE_EMPTY)
        assert MSG_TYPE_INVALID in result.message
        assert MSG_MODEL_EMPTY in result.message
        assert result.message.endswith(MSG_YEAR_INVALID)


class TestBuildVehicleRecords:
    """Tests for build_vehicle_records()"""

    def test_brand_is_first_word_of_model(self):
        records = build_vehicle_records([validate_vehicle_row(make_row(), TODAY)])

        assert records[0].brand == "VOLVO"
        assert records[0].model == "FH 540"

    def test_single_word_model(self):
        records = build_vehicle_records([validate_vehicle_row(make_row(model="SCANIA"), TODAY)])

        assert records[0].brand == "SCANIA"
        assert records[0].model == ""

    def test_defaults(self):
        records = build_vehicle_records([validate_vehicle_row(make_row(plate="rlj7b45"), TODAY)])

        assert records[0].plate == "RLJ7B45"
        assert records[0].is_refrigerated is True
        assert records[0].status == VehicleStatus.ACTIVE
        assert records[0].notes == "Thermo King"

    def test_error_rows_skipped(self):
        rows = [
            validate_vehicle_row(make_row(), TODAY),
            validate_vehicle_row(make_row(type="moto", row_index=2), TODAY),
        ]

        assert len(build_vehicle_records(rows)) == 1


class TestVehicleImportService:
    """Tests for VehicleImportService preview/confirm."""

    @pytest.fixture
    def service(self):
        return VehicleImportService(vehicle_service=MagicMock())

    def test_preview_counts(self, service):
        response = service.preview("RLJ7B45\tcavalo\tVOLVO FH 540\t2020\t\nABC1D23\tmoto\tHONDA\t2020\t")

        assert response.importable == 1
        assert response.errors == 1

    def test_confirm_creates_vehicles(self, service):
        preview = service.preview("RLJ7B45\tcavalo\tVOLVO FH 540\t2020\tThermo King")

        result = service.confirm(preview.preview_id)

        assert result.imported == 1
        service.vehicle_service.create.assert_called_once()

    def test_confirm_unknown_preview(self, service):
        with pytest.raises(ImportPreviewNotFoundError):
            service.confirm("missing")

    def test_confirm_nothing_valid(self, service):
        preview = service.preview("RLJ7B45\tmoto\tHONDA\t2020\t-")

        with pytest.raises(NothingToImportError):
            service.confirm(preview.preview_id)

    def test_confirm_write_failure(self, service):
        service.vehicle_service.create.side_effect = DatabaseError("insert", "duplicate plate")
        preview = service.preview("RLJ7B45\tcavalo\tVOLVO FH 540\t2020\tThermo King")

        with pytest.raises(VehicleImportCommitError):
            service.confirm(preview.preview_id)
