from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from rentmatch.models.status_enums import PropertyPurpose, PropertyStatus, PropertyType, RentFrequency
from rentmatch.utils.object_id_utils import stringify_id


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = Field(None, alias="postalCode")
    country: Optional[str] = None

    class Config:
        populate_by_name = True


class Policies(BaseModel):
    smoking_allowed: bool = Field(default=False, alias="smokingAllowed")
    pets_allowed: bool = Field(default=False, alias="petsAllowed")
    parties_allowed: bool = Field(default=False, alias="partiesAllowed")

    class Config:
        populate_by_name = True


class Availability(BaseModel):
    immediate: bool = True
    available_from: Optional[datetime] = Field(None, alias="availableFrom")
    minimum_stay: int = Field(default=1, alias="minimumStay")

    class Config:
        populate_by_name = True


class Property(BaseModel):
    """Listing as stored in the property catalog (read-only for matching)"""
    id: Optional[str] = None
    owner: Optional[str] = None
    title: str = ""

    type: PropertyType
    purpose: PropertyPurpose
    status: PropertyStatus = PropertyStatus.ACTIVE

    price: Optional[float] = Field(None, ge=0)
    currency: str = "LKR"
    rent_frequency: Optional[RentFrequency] = Field(None, alias="rentFrequency")

    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area_sqft: Optional[float] = Field(None, ge=0, alias="areaSqft")

    address: Address = Field(default_factory=Address)
    images: List[str] = []
    amenities: List[str] = []
    policies: Policies = Field(default_factory=Policies)
    availability: Availability = Field(default_factory=Availability)

    class Config:
        populate_by_name = True

    @classmethod
    def from_db_doc(cls, doc: Dict[str, Any]) -> "Property":
        """Create a property from a catalog document"""
        data = dict(doc)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        if data.get("owner") is not None:
            data["owner"] = stringify_id(data["owner"])
        # Sub-documents may be stored as null
        for key in ("address", "policies", "availability"):
            if data.get(key) is None:
                data.pop(key, None)
        for key in ("amenities", "images"):
            if data.get(key) is None:
                data[key] = []
        return cls(**data)

    def to_summary(self) -> "PropertySummary":
        return PropertySummary(
            id=self.id,
            title=self.title,
            type=self.type,
            price=self.price,
            currency=self.currency,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            area_sqft=self.area_sqft,
            address=self.address,
            images=self.images,
            amenities=self.amenities,
        )


class PropertySummary(BaseModel):
    """Listing fields shown alongside a rental request's matched properties"""
    id: Optional[str] = None
    title: str = ""
    type: PropertyType
    price: Optional[float] = None
    currency: str = "LKR"
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area_sqft: Optional[float] = Field(None, alias="areaSqft")
    address: Address = Field(default_factory=Address)
    images: List[str] = []
    amenities: List[str] = []

    class Config:
        populate_by_name = True
