"""
Host-facing view: which open rental requests fit a host's properties
"""

import logging
from typing import List, Optional

from rentmatch.models.match import HostPropertyMatch, HostRequestMatch
from rentmatch.services.matching_service import MatchingService
from rentmatch.services.property_catalog_service import PropertyCatalogService
from rentmatch.services.rental_request_service import RentalRequestService

logger = logging.getLogger(__name__)


class HostRequestService:
    """Matches the open request pool against one host's active properties"""

    def __init__(
        self,
        catalog: Optional[PropertyCatalogService] = None,
        request_service: Optional[RentalRequestService] = None,
        matching_service: Optional[MatchingService] = None,
    ):
        self.catalog = catalog or PropertyCatalogService()
        self.matching_service = matching_service or MatchingService(catalog=self.catalog)
        self.request_service = request_service or RentalRequestService(matching_service=self.matching_service)

    async def get_matching_requests(
        self,
        owner_id: str,
        property_type: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[HostRequestMatch]:
        """Get open requests matching at least one of the host's properties, most relevant first"""
        host_properties = await self.catalog.get_active_properties_for_owner(owner_id)
        if not host_properties:
            return []

        open_requests = await self.request_service.list_open_requests(property_type, location)

        matched_requests = []
        for request in open_requests:
            matching_properties = []
            for prop in host_properties:
                check = self.matching_service.check_match(prop, request)
                if check.matches:
                    matching_properties.append(
                        HostPropertyMatch(property_id=prop.id or "", property_title=prop.title, score=check.score)
                    )

            if not matching_properties:
                continue

            matching_properties.sort(key=lambda m: m.score, reverse=True)
            matched_requests.append(
                HostRequestMatch(
                    request=request.model_dump(by_alias=True, mode="json"),
                    relevance_score=matching_properties[0].score,
                    matching_property_count=len(matching_properties),
                    matching_properties=matching_properties,
                )
            )

        matched_requests.sort(key=lambda m: m.relevance_score, reverse=True)
        logger.info(
            "Host %s: %d of %d open requests match %d properties",
            owner_id,
            len(matched_requests),
            len(open_requests),
            len(host_properties),
        )
        return matched_requests
