"""
Admin Endpoints - manual washes and availability listing
"""
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from carwash.api import deps
from carwash.schemas.availability import AdminAvailabilityResponse, AvailabilityBlockResponse
from carwash.schemas.wash import AdminWashCreate, AdminWashResponse
from carwash.services.availability_service import AvailabilityService
from carwash.services.wash_service import WashService
from carwash.utils.parsing import clean_zip

router = APIRouter()


@router.post("/washes", response_model=AdminWashResponse, status_code=status.HTTP_201_CREATED)
async def create_wash(
    wash_in: AdminWashCreate,
    service: WashService = Depends(deps.get_wash_service),
) -> Any:
    """
    Insert a wash directly. Does not reserve availability capacity.
    """
    return await service.create_admin_wash(wash_in)


@router.get("/availability", response_model=AdminAvailabilityResponse)
async def list_availability(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    zip: Optional[str] = Query(None),
    service: AvailabilityService = Depends(deps.get_availability_service),
) -> Any:
    blocks = await service.list_open_blocks(start_date, end_date, clean_zip(zip))
    return AdminAvailabilityResponse(
        availability=[AvailabilityBlockResponse.model_validate(block) for block in blocks]
    )
