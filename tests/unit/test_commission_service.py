"""
Unit tests for CommissionService.

Run: pytest tests/unit/test_commission_service.py -v
"""

import pytest
from pydantic import ValidationError
from datetime import date

from services.commission_service import CommissionService
from services.trip_service import TripService
from services.driver_service import DriverService
from models.commission import CommissionRuleCreate, ManualCommissionCreate
from exceptions import CommissionRuleNotFoundError, ManualCommissionNotFoundError
from tests.factories import CommissionRuleFactory, DriverFactory, TripFactory


@pytest.fixture
def service(mock_db) -> CommissionService:
    return CommissionService(trip_service=TripService(), driver_service=DriverService())


class TestCommissionRules:
    """Tests for rule CRUD."""

    def test_get_rules(self, service, mock_supabase):
        mock_supabase.set_table_data("commission_rules", [
            CommissionRuleFactory.create("SP", "RJ", 100.0, id="rule-1"),
            CommissionRuleFactory.create("BRF", "CD FARIAS", 150.0, id="rule-2"),
        ])

        rules = service.get_rules()

        assert [r.id for r in rules] == ["rule-1", "rule-2"]
        assert rules[1].commission_value == 150.0

    def test_create_rule(self, service):
        rule = service.create_rule(CommissionRuleCreate(
            origin=" SP ",
            destination="RJ",
            commission_value=100.0,
        ))

        assert rule.id == "test-uuid-123"
        assert rule.origin == "SP"

    def test_rule_value_must_be_positive(self):
        with pytest.raises(ValidationError):
            CommissionRuleCreate(origin="SP", destination="RJ", commission_value=0)

    def test_delete_missing_rule(self, service):
        with pytest.raises(CommissionRuleNotFoundError):
            service.delete_rule("missing")

    def test_delete_rule(self, service, mock_supabase):
        mock_supabase.set_table_data("commission_rules", [{"id": "rule-1"}])

        assert service.delete_rule("rule-1") is True


class TestManualCommissions:
    """Tests for manual commission CRUD."""

    def test_create_manual_commission(self, service):
        entry = service.create_manual_commission(ManualCommissionCreate(
            driver_id="drv-1",
            description="Descarga extra",
            commission_value=50.0,
            date=date(2025, 3, 5),
        ))

        assert entry.id == "test-uuid-123"
        assert entry.date == date(2025, 3, 5)

    def test_delete_missing_manual_commission(self, service):
        with pytest.raises(ManualCommissionNotFoundError):
            service.delete_manual_commission("missing")


class TestDriverRanking:
    """Tests for get_driver_ranking()"""

    def test_ranking_sorted_by_total(self, service, mock_supabase):
        mock_supabase.set_table_data("drivers", [
            DriverFactory.create(id="drv-1", name="CARLOS"),
            DriverFactory.create(id="drv-2", name="JOAO"),
        ])
        mock_supabase.set_table_data("trips", [
            TripFactory.create(driver_id="drv-1", driver_commission=100.0, departure_date="2025-03-02"),
            TripFactory.create(driver_id="drv-2", driver_commission=150.0, departure_date="2025-03-03"),
            TripFactory.create(driver_id="drv-2", driver_commission=150.0, departure_date="2025-03-04"),
        ])

        ranking = service.get_driver_ranking(2025, 3)

        assert [d.driver_id for d in ranking.drivers] == ["drv-2", "drv-1"]
        assert ranking.drivers[0].driver_name == "JOAO"
        assert ranking.drivers[0].trip_count == 2
        assert ranking.drivers[0].total_commission == 300.0
        assert ranking.grand_total == 400.0

    def test_zero_and_missing_commissions_skipped(self, service, mock_supabase):
        mock_supabase.set_table_data("trips", [
            TripFactory.create(driver_id="drv-1", driver_commission=0),
            TripFactory.create(driver_id="drv-1", driver_commission=None),
        ])

        ranking = service.get_driver_ranking(2025, 3)

        assert ranking.drivers == []
        assert ranking.grand_total == 0

    def test_unregistered_driver_shown_as_unknown(self, service, mock_supabase):
        mock_supabase.set_table_data("trips", [
            TripFactory.create(driver_id="MARIA", driver_commission=80.0),
        ])

        ranking = service.get_driver_ranking(2025, 3)

        assert ranking.drivers[0].driver_name == "N/A"

    def test_manual_commissions_added(self, service, mock_supabase):
        mock_supabase.set_table_data("drivers", [DriverFactory.create(id="drv-1", name="CARLOS")])
        mock_supabase.set_table_data("trips", [
            TripFactory.create(driver_id="drv-1", driver_commission=100.0),
        ])
        mock_supabase.set_table_data("manual_commissions", [
            {
                "id": "man-1",
                "driver_id": "drv-1",
                "description": "Descarga extra",
                "commission_value": 40.0,
                "date": "2025-03-10",
            },
            {
                "id": "man-2",
                "driver_id": "PEDRO",
                "description": "Ajudante",
                "commission_value": 25.5,
                "date": "2025-03-12",
            },
        ])

        ranking = service.get_driver_ranking(2025, 3)

        carlos = ranking.drivers[0]
        assert carlos.total_commission == 140.0
        assert carlos.manual_commissions == 40.0
        assert carlos.trip_count == 1
        pedro = ranking.drivers[1]
        assert pedro.driver_name == "PEDRO"
        assert pedro.trip_count == 0
        assert ranking.grand_total == 165.5

    def test_period_covers_whole_month(self, service):
        ranking = service.get_driver_ranking(2024, 2)

        assert ranking.period_start == date(2024, 2, 1)
        assert ranking.period_end == date(2024, 2, 29)
