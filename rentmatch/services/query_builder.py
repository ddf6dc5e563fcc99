"""
Builds the coarse catalog filter used before scoring.

The filter only narrows the candidate set; the authoritative location and
budget checks happen in the scorer.
"""

from typing import Any, Dict, List

from rentmatch.models.rental_request import RentalRequest
from rentmatch.models.status_enums import FREQUENCY_BOUND_PURPOSES, PropertyStatus


def build_location_conditions(request: RentalRequest) -> List[Dict[str, Any]]:
    """OR-conditions over the request's cities and districts (empty when unconstrained)"""
    location = request.location
    if location.flexible:
        return []

    conditions = []
    if location.cities:
        conditions.append({"address.city": {"$in": list(location.cities)}})
    if location.districts:
        conditions.append({"address.district": {"$in": list(location.districts)}})
    return conditions


def build_property_query(request: RentalRequest) -> Dict[str, Any]:
    """Build the MongoDB filter selecting candidate properties for a request"""
    query: Dict[str, Any] = {
        "status": PropertyStatus.ACTIVE.value,
        "purpose": request.purpose.value,
    }

    if request.property_types:
        query["type"] = {"$in": [t.value for t in request.property_types]}

    if request.purpose in FREQUENCY_BOUND_PURPOSES:
        query["rentFrequency"] = request.budget.frequency.value

    location_conditions = build_location_conditions(request)
    if location_conditions:
        query["$or"] = location_conditions

    return query
