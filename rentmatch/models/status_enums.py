"""
Centralized enums for properties and rental requests
"""

from enum import Enum


class PropertyType(str, Enum):
    """Property type tags shared by listings and request criteria"""
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"
    BUNGALOW = "bungalow"
    LAND = "land"
    COMMERCIAL = "commercial"
    ROOM = "room"


class PropertyPurpose(str, Enum):
    """What a listing is offered for"""
    RENT = "rent"
    SALE = "sale"
    BOOKING = "booking"


class PropertyStatus(str, Enum):
    """Listing moderation / availability status"""
    ACTIVE = "active"               # Visible and matchable
    INACTIVE = "inactive"
    PENDING = "pending"             # Waiting for admin approval
    REJECTED = "rejected"
    SOLD = "sold"
    RENTED = "rented"


class RentFrequency(str, Enum):
    """Billing period of a rent or booking price"""
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"


class RequestPurpose(str, Enum):
    """What a tenant is looking for"""
    RENT = "rent"
    BOOKING = "booking"


class RentalRequestStatus(str, Enum):
    """Lifecycle status of a rental request"""
    ACTIVE = "active"               # Open, no match found yet
    MATCHED = "matched"             # At least one property cleared the threshold
    FULFILLED = "fulfilled"         # Owner marked the request as done (terminal)
    CANCELLED = "cancelled"         # Soft deleted


# Purposes whose prices are quoted per period and must agree on frequency
FREQUENCY_BOUND_PURPOSES = (RequestPurpose.RENT, RequestPurpose.BOOKING)

# Requests the host-facing view considers open
OPEN_REQUEST_STATUSES = (RentalRequestStatus.ACTIVE, RentalRequestStatus.MATCHED)
