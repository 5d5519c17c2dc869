"""
Models module initialization
"""
from carwash.models.washer import Washer
from carwash.models.schedule import ApprovalStatus, WasherDefaultWeek, WasherScheduleException
from carwash.models.availability import AvailabilityStatus, WasherAvailability
from carwash.models.wash import Wash, WashStatus
from carwash.models.subscription_credit import SubscriptionCredit

__all__ = [
    "Washer",
    "ApprovalStatus",
    "WasherDefaultWeek",
    "WasherScheduleException",
    "AvailabilityStatus",
    "WasherAvailability",
    "Wash",
    "WashStatus",
    "SubscriptionCredit",
]
