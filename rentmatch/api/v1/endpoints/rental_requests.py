"""
API endpoints for tenant rental requests
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from rentmatch.api.dependencies import get_current_user
from rentmatch.exceptions import (
    InvalidStatusTransitionError,
    RentalRequestNotFoundError,
    RentalRequestPermissionError,
    RentalRequestValidationError,
)
from rentmatch.models.rental_request import RentalRequestCreate, RentalRequestUpdate
from rentmatch.models.status_enums import RentalRequestStatus
from rentmatch.models.token import TokenData
from rentmatch.services import get_matching_service
from rentmatch.services.rental_request_service import RentalRequestService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_rental_request_service() -> RentalRequestService:
    return RentalRequestService(matching_service=get_matching_service())


def _to_http_exception(error: Exception) -> HTTPException:
    if isinstance(error, RentalRequestNotFoundError):
        return HTTPException(status_code=404, detail="Rental request not found")
    if isinstance(error, RentalRequestPermissionError):
        return HTTPException(status_code=403, detail="Forbidden")
    if isinstance(error, RentalRequestValidationError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, InvalidStatusTransitionError):
        return HTTPException(status_code=409, detail=error.message)
    return HTTPException(status_code=500, detail=str(error) or "Internal server error")


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_rental_request(
    payload: RentalRequestCreate,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Create a rental request and match it against the property catalog"""
    try:
        request, matches = await service.create_request(current_user.user_id, payload)
        (data,) = await service.populate_matched_properties([request])
    except Exception as e:
        logger.error("Rental request create error: %s", e)
        raise _to_http_exception(e) from e

    return {
        "message": "Rental request created successfully",
        "data": data,
        "matchedCount": len(matches),
    }


@router.get("/")
async def list_rental_requests(
    request_status: Optional[RentalRequestStatus] = Query(None, alias="status", description="Filter by status"),
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Get the current user's rental requests, newest first"""
    requests = await service.list_requests_for_user(current_user.user_id, request_status)
    return {"data": await service.populate_matched_properties(requests)}


@router.get("/{request_id}")
async def get_rental_request(
    request_id: str,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Get one of the current user's rental requests"""
    try:
        request = await service.get_request_for_user(request_id, current_user.user_id)
        (data,) = await service.populate_matched_properties([request])
    except Exception as e:
        raise _to_http_exception(e) from e

    return {"data": data}


@router.patch("/{request_id}")
async def update_rental_request(
    request_id: str,
    update: RentalRequestUpdate,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Update a rental request; changing criteria recomputes its matches"""
    try:
        request = await service.update_request(request_id, current_user.user_id, update)
        (data,) = await service.populate_matched_properties([request])
    except Exception as e:
        logger.error("Rental request update error for %s: %s", request_id, e)
        raise _to_http_exception(e) from e

    return {
        "message": "Rental request updated successfully",
        "data": data,
    }


@router.delete("/{request_id}")
async def cancel_rental_request(
    request_id: str,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Cancel (soft delete) a rental request"""
    try:
        await service.cancel_request(request_id, current_user.user_id)
    except Exception as e:
        raise _to_http_exception(e) from e

    return {"message": "Rental request cancelled successfully"}


@router.get("/{request_id}/matches")
async def get_rental_request_matches(
    request_id: str,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Score the catalog against a request without storing the result"""
    try:
        request = await service.get_request_for_user(request_id, current_user.user_id)
        matches = await service.matching_service.find_matches(request)
    except Exception as e:
        raise _to_http_exception(e) from e

    return {"data": [m.model_dump(by_alias=True, mode="json") for m in matches]}


@router.post("/{request_id}/rematch")
async def rematch_rental_request(
    request_id: str,
    current_user: TokenData = Depends(get_current_user),
    service: RentalRequestService = Depends(get_rental_request_service),
):
    """Rescan the catalog for a request and replace its matched properties"""
    try:
        request, matches = await service.rematch_request(request_id, current_user.user_id)
        (data,) = await service.populate_matched_properties([request])
    except Exception as e:
        logger.error("Rental request rematch error for %s: %s", request_id, e)
        raise _to_http_exception(e) from e

    return {
        "data": data,
        "matchedCount": len(matches),
    }
