"""
Rental request to property matching.

Two directions share the scorer in ``match_scorer``:

- ``find_matches`` scans the catalog for one request (bulk matcher).
- ``check_match`` scores one property against one request (used by the host view).

Matching itself never writes; ``apply_match_result`` computes the new request
state and the rental request service persists it.
"""

import logging
from typing import List, Optional

from rentmatch.core.config import settings
from rentmatch.models.match import MatchCheck, MatchedProperty
from rentmatch.models.property import Property
from rentmatch.models.rental_request import RentalRequest
from rentmatch.models.status_enums import FREQUENCY_BOUND_PURPOSES, PropertyStatus, RentalRequestStatus
from rentmatch.services.match_scorer import BUDGET_POINTS, is_within_budget, rank_candidates, score_property
from rentmatch.services.property_catalog_service import PropertyCatalogService
from rentmatch.services.query_builder import build_property_query

logger = logging.getLogger(__name__)


class MatchingService:
    """Scores catalog properties against rental requests"""

    def __init__(
        self,
        catalog: Optional[PropertyCatalogService] = None,
        threshold: Optional[int] = None,
        candidate_limit: Optional[int] = None,
        full_single_pair_scoring: Optional[bool] = None,
    ):
        self.catalog = catalog or PropertyCatalogService()
        self.threshold = settings.MATCH_SCORE_THRESHOLD if threshold is None else threshold
        self.candidate_limit = candidate_limit or settings.MATCH_CANDIDATE_LIMIT
        self.full_single_pair_scoring = (
            settings.SINGLE_PAIR_FULL_SCORING if full_single_pair_scoring is None else full_single_pair_scoring
        )

    async def find_matches(self, request: RentalRequest) -> List[MatchedProperty]:
        """Find catalog properties matching a rental request, best score first"""
        query = build_property_query(request)
        candidates = await self.catalog.find_properties(query, limit=self.candidate_limit)

        matches = rank_candidates(candidates, request, self.threshold)

        logger.info(
            "Matched rental request %s: %d candidates, %d above threshold %s",
            request.id,
            len(candidates),
            len(matches),
            self.threshold,
        )
        return matches

    def check_match(self, prop: Property, request: RentalRequest) -> MatchCheck:
        """Check whether one property fits one rental request"""
        if prop.status != PropertyStatus.ACTIVE or prop.purpose.value != request.purpose.value:
            return MatchCheck(matches=False, score=0, details={})
        if request.purpose in FREQUENCY_BOUND_PURPOSES and prop.rent_frequency != request.budget.frequency:
            return MatchCheck(matches=False, score=0, details={})

        if not self.full_single_pair_scoring:
            return self._check_budget_only(prop, request)

        scored = score_property(prop, request)
        if scored is None:
            return MatchCheck(matches=False, score=0, details={"budgetMatch": False})

        return MatchCheck(
            matches=scored.score >= self.threshold,
            score=scored.score,
            details=scored.match_details.model_dump(by_alias=True),
        )

    def _check_budget_only(self, prop: Property, request: RentalRequest) -> MatchCheck:
        # Legacy scoring: stops after the budget component, so it can never reach the threshold
        if not is_within_budget(prop.price, request.budget):
            return MatchCheck(matches=False, score=0, details={})

        score = BUDGET_POINTS
        return MatchCheck(matches=score >= self.threshold, score=score, details={"budgetMatch": True})


def apply_match_result(request: RentalRequest, matches: List[MatchedProperty]) -> RentalRequest:
    """Return a copy of the request with its match state replaced by this result.

    ``matched_properties`` is overwritten wholesale. An ``active`` request with at
    least one match becomes ``matched``; a ``matched`` request is left as is even
    when the new result is empty.
    """
    property_ids = [m.property.id for m in matches if m.property.id]
    status = request.status
    if property_ids and status == RentalRequestStatus.ACTIVE:
        status = RentalRequestStatus.MATCHED

    return request.model_copy(update={"matched_properties": property_ids, "status": status})
