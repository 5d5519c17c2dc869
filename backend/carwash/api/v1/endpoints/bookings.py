"""
Booking Endpoints
"""
from typing import Any

from fastapi import APIRouter, Depends, status

from carwash.api import deps
from carwash.schemas.booking import BookingCreate, BookingResponse
from carwash.services.booking_service import BookingService

router = APIRouter()


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
) -> Any:
    """
    Book a wash into an open availability block.

    mode=auto picks the washer with the fewest completed washes this month
    in the ZIP; mode=specific requires washer_id.
    """
    return await service.book(booking_in)
