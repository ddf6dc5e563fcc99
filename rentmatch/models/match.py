"""
Models describing the outcome of scoring properties against a rental request
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from rentmatch.models.property import Property


class MatchDetails(BaseModel):
    """Per-component breakdown of a property's score"""
    type_match: bool = Field(default=True, alias="typeMatch")
    location_match: bool = Field(default=True, alias="locationMatch")
    budget_match: bool = Field(default=False, alias="budgetMatch")
    sweet_spot_bonus: bool = Field(default=False, alias="sweetSpotBonus")
    bedrooms_match: bool = Field(default=True, alias="bedroomsMatch")
    bathrooms_match: bool = Field(default=True, alias="bathroomsMatch")
    area_match: bool = Field(default=True, alias="areaMatch")
    amenities_match: int = Field(default=0, ge=0, le=100, alias="amenitiesMatch")  # percentage
    pets_match: bool = Field(default=True, alias="petsMatch")
    availability_match: bool = Field(default=True, alias="availabilityMatch")

    class Config:
        populate_by_name = True


class MatchedProperty(BaseModel):
    """A candidate that cleared the budget cutoff, with its score"""
    property: Property
    score: int
    match_details: MatchDetails = Field(..., alias="matchDetails")

    class Config:
        populate_by_name = True


class MatchCheck(BaseModel):
    """Result of checking one property against one request"""
    matches: bool
    score: int
    details: Dict[str, Any] = {}


class HostPropertyMatch(BaseModel):
    property_id: str = Field(..., alias="propertyId")
    property_title: str = Field("", alias="propertyTitle")
    score: int

    class Config:
        populate_by_name = True


class HostRequestMatch(BaseModel):
    """An open rental request that fits at least one of a host's properties"""
    request: Dict[str, Any]
    relevance_score: int = Field(..., alias="relevanceScore")
    matching_property_count: int = Field(..., alias="matchingPropertyCount")
    matching_properties: List[HostPropertyMatch] = Field(default_factory=list, alias="matchingProperties")

    class Config:
        populate_by_name = True
