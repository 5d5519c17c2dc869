"""
Customer Dashboard Endpoints
"""
from typing import Any

from fastapi import APIRouter, Depends, Query

from carwash.api import deps
from carwash.schemas.wash import DashboardResponse
from carwash.services.wash_service import WashService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Query(..., min_length=1),
    service: WashService = Depends(deps.get_wash_service),
) -> Any:
    """Upcoming and past washes for a customer, plus remaining credits."""
    return await service.get_dashboard(user_id)
