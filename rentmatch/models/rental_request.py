"""
Rental request model: a tenant's structured search criteria plus its match state
"""

from datetime import datetime, UTC
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from rentmatch.models.status_enums import PropertyType, RentalRequestStatus, RentFrequency, RequestPurpose
from rentmatch.utils.object_id_utils import stringify_id, to_object_id, to_object_ids


class RangeRequirement(BaseModel):
    """Optional inclusive bounds; a missing bound leaves that side unconstrained"""
    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)

    def is_satisfied_by(self, value: Optional[float]) -> bool:
        actual = value or 0
        if self.min is not None and actual < self.min:
            return False
        if self.max is not None and actual > self.max:
            return False
        return True


class Requirements(BaseModel):
    bedrooms: Optional[RangeRequirement] = None
    bathrooms: Optional[RangeRequirement] = None
    area_sqft: Optional[RangeRequirement] = Field(None, alias="areaSqft")

    class Config:
        populate_by_name = True


class LocationPreference(BaseModel):
    cities: List[str] = []
    districts: List[str] = []
    flexible: bool = False

    @property
    def has_preference(self) -> bool:
        """True when the request actually constrains location"""
        return not self.flexible and bool(self.cities or self.districts)


class Budget(BaseModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    currency: str = "LKR"
    frequency: RentFrequency


class ContactPreferences(BaseModel):
    email: bool = True
    sms: bool = False
    whatsapp: bool = False


# Allowed owner-driven or automatic status changes
STATUS_TRANSITIONS: Dict[RentalRequestStatus, tuple] = {
    RentalRequestStatus.ACTIVE: (
        RentalRequestStatus.MATCHED,
        RentalRequestStatus.FULFILLED,
        RentalRequestStatus.CANCELLED,
    ),
    RentalRequestStatus.MATCHED: (
        RentalRequestStatus.FULFILLED,
        RentalRequestStatus.CANCELLED,
    ),
    RentalRequestStatus.FULFILLED: (),
    RentalRequestStatus.CANCELLED: (),
}


class RentalRequest(BaseModel):
    """A tenant's rental request as stored in the rental_requests collection"""
    id: Optional[str] = None
    user_id: str = Field(..., alias="user")

    property_types: List[PropertyType] = Field(default_factory=list, alias="propertyTypes")
    purpose: RequestPurpose
    location: LocationPreference = Field(default_factory=LocationPreference)
    budget: Budget
    requirements: Requirements = Field(default_factory=Requirements)
    amenities: List[str] = []

    move_in_date: Optional[datetime] = Field(None, alias="moveInDate")
    duration_months: Optional[int] = Field(None, ge=1, alias="durationMonths")
    occupants: Optional[int] = Field(None, ge=1)
    has_pets: bool = Field(default=False, alias="hasPets")
    pet_details: Optional[str] = Field(None, alias="petDetails")
    additional_notes: Optional[str] = Field(None, alias="additionalNotes")

    status: RentalRequestStatus = RentalRequestStatus.ACTIVE
    matched_properties: List[str] = Field(default_factory=list, alias="matchedProperties")
    contact_preferences: ContactPreferences = Field(
        default_factory=ContactPreferences, alias="contactPreferences"
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="createdAt")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="updatedAt")

    class Config:
        populate_by_name = True

    def can_transition_to(self, target: RentalRequestStatus) -> bool:
        if target == self.status:
            return True
        return target in STATUS_TRANSITIONS.get(self.status, ())

    @classmethod
    def from_db_doc(cls, doc: Dict[str, Any]) -> "RentalRequest":
        """Create a rental request from a database document"""
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        if "user" in data:
            data["user"] = stringify_id(data["user"])
        data["matchedProperties"] = [stringify_id(p) for p in data.get("matchedProperties") or []]
        for key in ("location", "requirements", "contactPreferences"):
            if data.get(key) is None:
                data.pop(key, None)
        return cls(**data)

    def to_db_dict(self) -> Dict[str, Any]:
        """Convert to a document for insertion into MongoDB"""
        data = self.model_dump(by_alias=True, exclude={"id"}, mode="python")
        data["user"] = to_object_id(self.user_id)
        data["matchedProperties"] = to_object_ids(self.matched_properties)
        data["propertyTypes"] = [t.value for t in self.property_types]
        data["purpose"] = self.purpose.value
        data["status"] = self.status.value
        data["budget"]["frequency"] = self.budget.frequency.value
        return data


class BudgetInput(BaseModel):
    """Budget as submitted; completeness is checked by the service"""
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None
    frequency: Optional[RentFrequency] = None


class LocationInput(BaseModel):
    cities: Optional[List[str]] = None
    districts: Optional[List[str]] = None
    flexible: Optional[bool] = None


class RequirementsInput(BaseModel):
    bedrooms: Optional[RangeRequirement] = None
    bathrooms: Optional[RangeRequirement] = None
    area_sqft: Optional[RangeRequirement] = Field(None, alias="areaSqft")

    class Config:
        populate_by_name = True


class ContactPreferencesInput(BaseModel):
    email: Optional[bool] = None
    sms: Optional[bool] = None
    whatsapp: Optional[bool] = None


class RentalRequestCreate(BaseModel):
    """Payload for submitting a new rental request"""
    property_types: List[PropertyType] = Field(default_factory=list, alias="propertyTypes")
    purpose: Optional[RequestPurpose] = None
    location: Optional[LocationInput] = None
    budget: Optional[BudgetInput] = None
    requirements: Optional[RequirementsInput] = None
    amenities: List[str] = []
    move_in_date: Optional[datetime] = Field(None, alias="moveInDate")
    duration_months: Optional[int] = Field(None, ge=1, alias="durationMonths")
    occupants: Optional[int] = Field(None, ge=1)
    has_pets: bool = Field(default=False, alias="hasPets")
    pet_details: Optional[str] = Field(None, alias="petDetails")
    additional_notes: Optional[str] = Field(None, alias="additionalNotes")
    contact_preferences: Optional[ContactPreferencesInput] = Field(None, alias="contactPreferences")

    class Config:
        populate_by_name = True


class RentalRequestUpdate(BaseModel):
    """Partial update of a rental request; only fields that are sent are applied"""
    status: Optional[RentalRequestStatus] = None
    property_types: Optional[List[PropertyType]] = Field(None, alias="propertyTypes")
    location: Optional[LocationInput] = None
    budget: Optional[BudgetInput] = None
    requirements: Optional[RequirementsInput] = None
    amenities: Optional[List[str]] = None
    move_in_date: Optional[datetime] = Field(None, alias="moveInDate")
    duration_months: Optional[int] = Field(None, ge=1, alias="durationMonths")
    occupants: Optional[int] = Field(None, ge=1)
    has_pets: Optional[bool] = Field(None, alias="hasPets")
    pet_details: Optional[str] = Field(None, alias="petDetails")
    additional_notes: Optional[str] = Field(None, alias="additionalNotes")
    contact_preferences: Optional[ContactPreferencesInput] = Field(None, alias="contactPreferences")

    class Config:
        populate_by_name = True
