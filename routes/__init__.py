"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.trips import router as trips_router
from routes.vehicles import router as vehicles_router
from routes.drivers import router as drivers_router
from routes.commissions import router as commissions_router

__all__ = [
    "trips_router",
    "vehicles_router",
    "drivers_router",
    "commissions_router",
]
