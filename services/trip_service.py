"""
Trip service for trip persistence.

Bulk import writes trips one record at a time; a failure part-way through is
not rolled back.
"""

from typing import Optional
from datetime import date, datetime
import structlog

from config import get_supabase_client
from models.trip import TripCreate, TripResponse, TripStatus
from exceptions import DatabaseError, TripNotFoundError

logger = structlog.get_logger(__name__)


class TripService:
    """
    Trip business logic.

    Handles trip reads (lists, commission periods) and inserts.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "trips"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        status: Optional[TripStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TripResponse]:
        """
        Get trips, newest departure first.

        Args:
            status: Filter by trip status
            start_date: Earliest departure_date (inclusive)
            end_date: Latest departure_date (inclusive)

        Returns:
            List of TripResponse
        """
        logger.info(
            "getting_trips",
            status=status.value if status else None,
            start_date=str(start_date) if start_date else None,
            end_date=str(end_date) if end_date else None,
        )

        try:
            query = self.db.table(self.table).select("*")

            if status:
                query = query.eq("status", status.value)
            if start_date:
                query = query.gte("departure_date", start_date.isoformat())
            if end_date:
                query = query.lte("departure_date", end_date.isoformat())

            result = query.order("departure_date", desc=True).execute()

            trips = [TripResponse(**row) for row in result.data]

            logger.info("trips_retrieved", count=len(trips))
            return trips

        except Exception as e:
            logger.error("get_trips_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, trip_id: str) -> TripResponse:
        """
        Get a single trip by ID.

        Raises:
            TripNotFoundError: If trip doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", trip_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_trip_failed", trip_id=trip_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise TripNotFoundError(trip_id)

        return TripResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: TripCreate) -> TripResponse:
        """
        Create a single trip.

        Raises:
            DatabaseError: If insert fails
        """
        try:
            insert_data = data.model_dump(mode="json")
            insert_data["created_at"] = datetime.utcnow().isoformat()

            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )

            trip = TripResponse(**result.data[0])

            logger.debug("trip_created", trip_id=trip.id, vehicle_id=trip.vehicle_id)
            return trip

        except Exception as e:
            logger.error(
                "create_trip_failed",
                vehicle_id=data.vehicle_id,
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

    def create_many(self, trips: list[TripCreate]) -> list[TripResponse]:
        """
        Create trips one by one, in order.

        Stops at the first failure. Trips written before it stay written.

        Args:
            trips: Trips to insert

        Returns:
            Created trips

        Raises:
            DatabaseError: On the first failed insert
        """
        logger.info("creating_trips", count=len(trips))

        created = [self.create(trip) for trip in trips]

        logger.info("trips_created", count=len(created))
        return created


# Singleton instance
_service: Optional[TripService] = None


def get_trip_service() -> TripService:
    """Get or create TripService instance."""
    global _service
    if _service is None:
        _service = TripService()
    return _service
