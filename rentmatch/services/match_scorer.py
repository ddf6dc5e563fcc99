"""
Weighted multi-criteria scoring of a property against a rental request.

Every function here is pure: it reads the two records and returns a value.
A property whose price is outside the budget is disqualified (no score at
all); every other component only adds points. The total is not capped at 100
because the sweet-spot bonus sits on top of the 100 base points.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from rentmatch.models.match import MatchDetails, MatchedProperty
from rentmatch.models.property import Property
from rentmatch.models.rental_request import Budget, LocationPreference, RangeRequirement, RentalRequest

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 50

BUDGET_POINTS = 30
SWEET_SPOT_POINTS = 5
TYPE_POINTS = 15
LOCATION_POINTS = 15
BEDROOMS_POINTS = 10
BATHROOMS_POINTS = 10
AREA_POINTS = 5
AMENITIES_POINTS = 15
PETS_POINTS = 5
AVAILABILITY_POINTS = 5

SWEET_SPOT_LOW = 0.3
SWEET_SPOT_HIGH = 0.7


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_within_budget(price: Optional[float], budget: Budget) -> bool:
    actual = price or 0
    return budget.min <= actual <= budget.max


def in_sweet_spot(price: Optional[float], budget: Budget) -> bool:
    """True when the price sits in the 30%-70% band of the budget range.

    A single-point range (min == max) never earns the bonus.
    """
    budget_range = budget.max - budget.min
    if budget_range <= 0:
        return False
    position = ((price or 0) - budget.min) / budget_range
    return SWEET_SPOT_LOW <= position <= SWEET_SPOT_HIGH


def location_matches(prop: Property, location: LocationPreference) -> bool:
    if not location.has_preference:
        return True
    return prop.address.city in location.cities or prop.address.district in location.districts


def range_matches(requirement: Optional[RangeRequirement], value: Optional[float]) -> bool:
    if requirement is None:
        return True
    return requirement.is_satisfied_by(value)


def amenities_ratio(desired: List[str], offered: Iterable[str]) -> float:
    """Share of the desired amenities the property offers (1.0 when nothing is desired)"""
    if not desired:
        return 1.0
    offered_set = set(offered or [])
    found = [amenity for amenity in desired if amenity in offered_set]
    return len(found) / len(desired)


def pets_match(prop: Property, request: RentalRequest) -> bool:
    if not request.has_pets:
        return True
    return bool(prop.policies.pets_allowed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def availability_match(prop: Property, request: RentalRequest) -> bool:
    if request.move_in_date is None:
        return True
    if prop.availability.immediate:
        return True
    available_from = prop.availability.available_from
    if available_from is None:
        return False
    return _as_utc(available_from) <= _as_utc(request.move_in_date)


def score_property(prop: Property, request: RentalRequest) -> Optional[MatchedProperty]:
    """Score one candidate. Returns None when the budget disqualifies it."""
    if not is_within_budget(prop.price, request.budget):
        return None

    details = MatchDetails(budget_match=True)
    score = float(BUDGET_POINTS)

    if in_sweet_spot(prop.price, request.budget):
        details.sweet_spot_bonus = True
        score += SWEET_SPOT_POINTS

    # Type is enforced by the catalog query, the component is always awarded
    score += TYPE_POINTS

    details.location_match = location_matches(prop, request.location)
    if details.location_match:
        score += LOCATION_POINTS

    requirements = request.requirements
    details.bedrooms_match = range_matches(requirements.bedrooms, prop.bedrooms)
    if details.bedrooms_match:
        score += BEDROOMS_POINTS

    details.bathrooms_match = range_matches(requirements.bathrooms, prop.bathrooms)
    if details.bathrooms_match:
        score += BATHROOMS_POINTS

    details.area_match = range_matches(requirements.area_sqft, prop.area_sqft)
    if details.area_match:
        score += AREA_POINTS

    ratio = amenities_ratio(request.amenities, prop.amenities)
    details.amenities_match = round_half_up(ratio * 100)
    score += AMENITIES_POINTS * ratio

    details.pets_match = pets_match(prop, request)
    if details.pets_match:
        score += PETS_POINTS

    details.availability_match = availability_match(prop, request)
    if details.availability_match:
        score += AVAILABILITY_POINTS

    return MatchedProperty(property=prop, score=round_half_up(score), match_details=details)


def rank_candidates(
    candidates: Iterable[Property],
    request: RentalRequest,
    threshold: int = MATCH_THRESHOLD,
) -> List[MatchedProperty]:
    """Score every candidate, keep those at or above the threshold, best first.

    The sort is stable, so equal scores keep the order of ``candidates``.
    """
    matches = []
    for prop in candidates:
        scored = score_property(prop, request)
        if scored is None:
            logger.debug("Property %s disqualified by budget (price=%s)", prop.id, prop.price)
            continue
        if scored.score >= threshold:
            matches.append(scored)

    return sorted(matches, key=lambda m: m.score, reverse=True)
