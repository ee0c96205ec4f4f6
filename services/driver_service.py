"""
Driver service for read-only driver lookups.

Drivers are registered through their own form; import only reads them.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.driver import DriverResponse
from exceptions import DatabaseError, DriverNotFoundError

logger = structlog.get_logger(__name__)


class DriverService:
    """Handles read operations for drivers."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "drivers"

    def get_all(self) -> list[DriverResponse]:
        """
        Get all drivers ordered by name.

        Returns:
            List of DriverResponse
        """
        logger.info("getting_all_drivers")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("name")
                .execute()
            )

            drivers = [DriverResponse(**row) for row in result.data]

            logger.info("drivers_retrieved", count=len(drivers))
            return drivers

        except Exception as e:
            logger.error("get_all_drivers_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, driver_id: str) -> DriverResponse:
        """
        Get a single driver by ID.

        Raises:
            DriverNotFoundError: If driver doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", driver_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_driver_failed", driver_id=driver_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise DriverNotFoundError(driver_id)

        return DriverResponse(**result.data[0])


# Singleton instance
_service: Optional[DriverService] = None


def get_driver_service() -> DriverService:
    """Get or create DriverService instance."""
    global _service
    if _service is None:
        _service = DriverService()
    return _service
