"""
API endpoints for hosts browsing rental requests that fit their properties
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rentmatch.api.dependencies import get_current_user
from rentmatch.models.token import TokenData
from rentmatch.services import get_matching_service
from rentmatch.services.host_request_service import HostRequestService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_host_request_service() -> HostRequestService:
    return HostRequestService(matching_service=get_matching_service())


@router.get("/")
async def get_host_rental_requests(
    property_type: Optional[str] = Query(None, alias="propertyType", description="Only requests wanting this type"),
    location: Optional[str] = Query(None, description="City or district the request must include"),
    current_user: TokenData = Depends(get_current_user),
    service: HostRequestService = Depends(get_host_request_service),
):
    """Get open rental requests matching the current host's active properties"""
    try:
        matches = await service.get_matching_requests(current_user.user_id, property_type, location)
    except Exception as e:
        logger.error("Host rental requests error for %s: %s", current_user.user_id, e)
        raise HTTPException(status_code=500, detail=str(e) or "Internal server error") from e

    data = []
    for match in matches:
        item = dict(match.request)
        item.update(match.model_dump(by_alias=True, mode="json", exclude={"request"}))
        data.append(item)
    return {"data": data}
