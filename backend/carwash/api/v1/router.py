"""
API v1 Router - combines all route modules
"""
from fastapi import APIRouter

from carwash.api.v1.endpoints import admin, availability, bookings, dashboard, staff_schedule

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(staff_schedule.router, prefix="/staff/schedule", tags=["Staff Schedule"])
api_router.include_router(availability.router, prefix="/availability", tags=["Availability"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
