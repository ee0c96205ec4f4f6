"""
Vehicle service for fleet lookups and creation.
"""

from typing import Optional
from datetime import datetime
import structlog

from config import get_supabase_client
from models.vehicle import VehicleCreate, VehicleResponse
from exceptions import DatabaseError, VehicleNotFoundError

logger = structlog.get_logger(__name__)


class VehicleService:
    """
    Vehicle business logic.

    Handles reads for reference snapshots and inserts from bulk import.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "vehicles"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[VehicleResponse]:
        """
        Get all vehicles ordered by plate.

        Returns:
            List of VehicleResponse
        """
        logger.info("getting_all_vehicles")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("plate")
                .execute()
            )

            vehicles = [VehicleResponse(**row) for row in result.data]

            logger.info("vehicles_retrieved", count=len(vehicles))
            return vehicles

        except Exception as e:
            logger.error("get_all_vehicles_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, vehicle_id: str) -> VehicleResponse:
        """
        Get a single vehicle by ID.

        Raises:
            VehicleNotFoundError: If vehicle doesn't exist
        """
        logger.debug("getting_vehicle", vehicle_id=vehicle_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", vehicle_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_vehicle_failed", vehicle_id=vehicle_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise VehicleNotFoundError(vehicle_id)

        return VehicleResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: VehicleCreate) -> VehicleResponse:
        """
        Create a new vehicle.

        Args:
            data: Vehicle creation data

        Returns:
            Created VehicleResponse

        Raises:
            DatabaseError: If insert fails
        """
        logger.info("creating_vehicle", plate=data.plate, type=data.type.value)

        try:
            insert_data = data.model_dump(mode="json")
            insert_data["created_at"] = datetime.utcnow().isoformat()

            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )

            vehicle = VehicleResponse(**result.data[0])

            logger.info("vehicle_created", vehicle_id=vehicle.id, plate=vehicle.plate)
            return vehicle

        except Exception as e:
            logger.error("create_vehicle_failed", plate=data.plate, error=str(e))
            raise DatabaseError("insert", str(e))


# Singleton instance
_service: Optional[VehicleService] = None


def get_vehicle_service() -> VehicleService:
    """Get or create VehicleService instance."""
    global _service
    if _service is None:
        _service = VehicleService()
    return _service
