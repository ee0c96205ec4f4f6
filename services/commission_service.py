"""
Commission service.

Manages lane commission rules and manual commissions, and builds the
monthly driver commission ranking.
"""

from typing import Optional
from datetime import date, datetime
import calendar
import structlog

from config import get_supabase_client
from models.commission import (
    CommissionRuleCreate,
    CommissionRuleResponse,
    ManualCommissionCreate,
    ManualCommissionResponse,
    DriverCommissionSummary,
    CommissionRankingResponse,
)
from models.trip import TripStatus
from services.trip_service import TripService, get_trip_service
from services.driver_service import DriverService, get_driver_service
from exceptions import (
    DatabaseError,
    CommissionRuleNotFoundError,
    ManualCommissionNotFoundError,
)

logger = structlog.get_logger(__name__)

UNKNOWN_DRIVER_NAME = "N/A"


class CommissionService:
    """
    Commission business logic.

    Rules are read by the trip importer; the ranking reads completed trips.
    """

    def __init__(
        self,
        trip_service: Optional[TripService] = None,
        driver_service: Optional[DriverService] = None,
    ):
        self.db = get_supabase_client()
        self.rules_table = "commission_rules"
        self.manual_table = "manual_commissions"
        self._trip_service = trip_service
        self._driver_service = driver_service

    @property
    def trip_service(self) -> TripService:
        if self._trip_service is None:
            self._trip_service = get_trip_service()
        return self._trip_service

    @property
    def driver_service(self) -> DriverService:
        if self._driver_service is None:
            self._driver_service = get_driver_service()
        return self._driver_service

    # ===================
    # COMMISSION RULES
    # ===================

    def get_rules(self) -> list[CommissionRuleResponse]:
        """
        Get all lane rules, newest first.

        Lookup takes the first matching rule, so a newer rule for the same
        lane wins over an older one.
        """
        logger.info("getting_commission_rules")

        try:
            result = (
                self.db.table(self.rules_table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )

            rules = [CommissionRuleResponse(**row) for row in result.data]

            logger.info("commission_rules_retrieved", count=len(rules))
            return rules

        except Exception as e:
            logger.error("get_commission_rules_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def create_rule(self, data: CommissionRuleCreate) -> CommissionRuleResponse:
        """
        Create a lane commission rule.

        Raises:
            DatabaseError: If insert fails
        """
        logger.info(
            "creating_commission_rule",
            origin=data.origin,
            destination=data.destination,
            commission_value=data.commission_value
        )

        try:
            insert_data = data.model_dump(mode="json")
            insert_data["created_at"] = datetime.utcnow().isoformat()

            result = (
                self.db.table(self.rules_table)
                .insert(insert_data)
                .execute()
            )

            rule = CommissionRuleResponse(**result.data[0])

            logger.info("commission_rule_created", rule_id=rule.id)
            return rule

        except Exception as e:
            logger.error("create_commission_rule_failed", error=str(e))
            raise DatabaseError("insert", str(e))

    def delete_rule(self, rule_id: str) -> bool:
        """
        Delete a lane commission rule.

        Raises:
            CommissionRuleNotFoundError: If rule doesn't exist
        """
        logger.info("deleting_commission_rule", rule_id=rule_id)

        self._ensure_exists(self.rules_table, rule_id, CommissionRuleNotFoundError)

        try:
            self.db.table(self.rules_table).delete().eq("id", rule_id).execute()

            logger.info("commission_rule_deleted", rule_id=rule_id)
            return True

        except Exception as e:
            logger.error("delete_commission_rule_failed", rule_id=rule_id, error=str(e))
            raise DatabaseError("delete", str(e))

    # ===================
    # MANUAL COMMISSIONS
    # ===================

    def get_manual_commissions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ManualCommissionResponse]:
        """Get manual commissions dated within [start_date, end_date], newest first."""
        logger.info("getting_manual_commissions")

        try:
            query = self.db.table(self.manual_table).select("*")

            if start_date:
                query = query.gte("date", start_date.isoformat())
            if end_date:
                query = query.lte("date", end_date.isoformat())

            result = query.order("created_at", desc=True).execute()

            return [ManualCommissionResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_manual_commissions_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def create_manual_commission(self, data: ManualCommissionCreate) -> ManualCommissionResponse:
        """
        Record a manual commission for a driver.

        Raises:
            DatabaseError: If insert fails
        """
        logger.info(
            "creating_manual_commission",
            driver_id=data.driver_id,
            commission_value=data.commission_value
        )

        try:
            insert_data = data.model_dump(mode="json")
            insert_data["created_at"] = datetime.utcnow().isoformat()

            result = (
                self.db.table(self.manual_table)
                .insert(insert_data)
                .execute()
            )

            commission = ManualCommissionResponse(**result.data[0])

            logger.info("manual_commission_created", commission_id=commission.id)
            return commission

        except Exception as e:
            logger.error("create_manual_commission_failed", error=str(e))
            raise DatabaseError("insert", str(e))

    def delete_manual_commission(self, commission_id: str) -> bool:
        """
        Delete a manual commission.

        Raises:
            ManualCommissionNotFoundError: If entry doesn't exist
        """
        logger.info("deleting_manual_commission", commission_id=commission_id)

        self._ensure_exists(self.manual_table, commission_id, ManualCommissionNotFoundError)

        try:
            self.db.table(self.manual_table).delete().eq("id", commission_id).execute()

            logger.info("manual_commission_deleted", commission_id=commission_id)
            return True

        except Exception as e:
            logger.error(
                "delete_manual_commission_failed",
                commission_id=commission_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

    # ===================
    # RANKING
    # ===================

    def get_driver_ranking(self, year: int, month: int) -> CommissionRankingResponse:
        """
        Build the commission ranking for one calendar month.

        Trips count when completed, departing within the month, and paying
        a commission above zero. Manual commissions dated within the month
        add to the same driver's total.

        Args:
            year: Calendar year
            month: Calendar month (1-12)

        Returns:
            CommissionRankingResponse sorted by total commission, highest first
        """
        period_start = date(year, month, 1)
        period_end = date(year, month, calendar.monthrange(year, month)[1])

        logger.info(
            "building_commission_ranking",
            period_start=period_start.isoformat(),
            period_end=period_end.isoformat()
        )

        trips = self.trip_service.get_all(
            status=TripStatus.COMPLETED,
            start_date=period_start,
            end_date=period_end,
        )
        manual = self.get_manual_commissions(start_date=period_start, end_date=period_end)
        names = {d.id: d.name for d in self.driver_service.get_all()}

        summaries: dict[str, DriverCommissionSummary] = {}

        for trip in trips:
            if not trip.driver_commission or trip.driver_commission <= 0:
                continue

            driver_id = trip.driver_id or ""
            summary = summaries.get(driver_id)
            if summary is None:
                summary = DriverCommissionSummary(
                    driver_id=driver_id,
                    driver_name=names.get(driver_id, UNKNOWN_DRIVER_NAME),
                )
                summaries[driver_id] = summary

            summary.total_commission += trip.driver_commission
            summary.trip_count += 1
            summary.total_freight += trip.freight_value or 0

        for entry in manual:
            summary = summaries.get(entry.driver_id)
            if summary is None:
                # Free-text driver names are stored in driver_id
                summary = DriverCommissionSummary(
                    driver_id=entry.driver_id,
                    driver_name=names.get(entry.driver_id, entry.driver_id),
                )
                summaries[entry.driver_id] = summary

            summary.total_commission += entry.commission_value
            summary.manual_commissions += entry.commission_value

        ranking = sorted(
            summaries.values(),
            key=lambda s: s.total_commission,
            reverse=True
        )

        logger.info(
            "commission_ranking_built",
            drivers=len(ranking),
            trips=len(trips),
            manual_entries=len(manual)
        )

        return CommissionRankingResponse(
            year=year,
            month=month,
            period_start=period_start,
            period_end=period_end,
            drivers=ranking,
            grand_total=round(sum(s.total_commission for s in ranking), 2),
        )

    def _ensure_exists(self, table: str, record_id: str, not_found_error) -> None:
        """Raise not_found_error(record_id) if no row has this id."""
        try:
            result = (
                self.db.table(table)
                .select("id")
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            logger.error("lookup_failed", table=table, record_id=record_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise not_found_error(record_id)


# Singleton instance
_service: Optional[CommissionService] = None


def get_commission_service() -> CommissionService:
    """Get or create CommissionService instance."""
    global _service
    if _service is None:
        _service = CommissionService()
    return _service
