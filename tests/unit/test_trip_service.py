"""
Unit tests for TripService.

Run: pytest tests/unit/test_trip_service.py -v
"""

import pytest
from datetime import date
from unittest.mock import patch

from services.trip_service import TripService
from models.trip import TripCreate, TripStatus
from exceptions import DatabaseError, TripNotFoundError
from tests.factories import TripFactory


def make_trip(**overrides) -> TripCreate:
    data = dict(
        vehicle_id="veh-1",
        driver_id="drv-1",
        status=TripStatus.COMPLETED,
        origin="BRF",
        destination="CD FARIAS",
        departure_date=date(2025, 3, 10),
        driver_commission=150.0,
    )
    data.update(overrides)
    return TripCreate(**data)


class TestTripServiceRead:
    """Tests for TripService reads."""

    def test_get_all(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("trips", TripFactory.create_batch(3))
        service = TripService()

        trips = service.get_all(status=TripStatus.COMPLETED, start_date=date(2025, 3, 1))

        assert len(trips) == 3
        assert trips[0].status == TripStatus.COMPLETED

    def test_get_by_id(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("trips", [TripFactory.create(id="trip-1")])
        service = TripService()

        trip = service.get_by_id("trip-1")

        assert trip.id == "trip-1"

    def test_get_by_id_not_found(self, mock_db, mock_supabase):
        service = TripService()

        with pytest.raises(TripNotFoundError):
            service.get_by_id("missing")

    def test_read_failure_wrapped(self, mock_db, mock_supabase):
        service = TripService()

        with patch.object(mock_supabase, "table", side_effect=RuntimeError("offline")):
            with pytest.raises(DatabaseError):
                service.get_all()


class TestTripServiceWrite:
    """Tests for TripService inserts."""

    def test_create(self, mock_db, mock_supabase):
        service = TripService()

        trip = service.create(make_trip())

        assert trip.id == "test-uuid-123"
        assert trip.departure_date == date(2025, 3, 10)
        assert trip.driver_commission == 150.0

    def test_create_keeps_missing_commission(self, mock_db, mock_supabase):
        """A trip without a lane rule is stored with no commission, not 0."""
        service = TripService()

        trip = service.create(make_trip(driver_commission=None))

        assert trip.driver_commission is None

    def test_create_many_in_order(self, mock_db, mock_supabase):
        service = TripService()

        created = service.create_many([make_trip(destination="A"), make_trip(destination="B")])

        assert [t.destination for t in created] == ["A", "B"]

    def test_create_many_stops_at_first_failure(self, mock_db, mock_supabase):
        service = TripService()
        calls = []

        def fake_create(trip):
            calls.append(trip.destination)
            if trip.destination == "B":
                raise DatabaseError("insert", "timeout")

        with patch.object(service, "create", side_effect=fake_create):
            with pytest.raises(DatabaseError):
                service.create_many([
                    make_trip(destination="A"),
                    make_trip(destination="B"),
                    make_trip(destination="C"),
                ])

        assert calls == ["A", "B"]
