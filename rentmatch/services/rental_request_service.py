"""
Service for managing rental requests and keeping their matches current.

Creating a request, or editing any of its matching criteria, runs the bulk
matcher and overwrites the stored ``matchedProperties`` with the new result.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pydantic import ValidationError

from rentmatch.core.config import settings
from rentmatch.db.mongodb import mongodb
from rentmatch.exceptions import (
    InvalidStatusTransitionError,
    RentalRequestNotFoundError,
    RentalRequestPermissionError,
    RentalRequestValidationError,
)
from rentmatch.models.match import MatchedProperty
from rentmatch.models.rental_request import (
    BudgetInput,
    RentalRequest,
    RentalRequestCreate,
    RentalRequestUpdate,
)
from rentmatch.models.status_enums import OPEN_REQUEST_STATUSES, RentalRequestStatus
from rentmatch.services.matching_service import MatchingService, apply_match_result
from rentmatch.utils.object_id_utils import to_object_id, to_object_ids

logger = logging.getLogger(__name__)

# Fields whose change invalidates the stored matches
CRITERIA_FIELDS = ("property_types", "location", "budget", "requirements", "amenities", "move_in_date", "has_pets")


def validate_budget(budget: Optional[BudgetInput]) -> None:
    """Validate a complete budget as required on submission"""
    if budget is None or budget.min is None or budget.max is None or budget.frequency is None:
        raise RentalRequestValidationError("Budget must include min, max, and frequency", field="budget")
    if budget.min <= 0 or budget.max <= 0:
        raise RentalRequestValidationError("Budget values must be greater than 0", field="budget")
    if budget.min > budget.max:
        raise RentalRequestValidationError("Minimum budget cannot exceed maximum budget", field="budget")


class RentalRequestService:
    """Service for rental request lifecycle and match write-back"""

    def __init__(self, matching_service: Optional[MatchingService] = None):
        self.matching_service = matching_service or MatchingService()
        self.catalog = self.matching_service.catalog

    # ==================== READ ====================

    async def get_request(self, request_id: str) -> RentalRequest:
        """Get a rental request by ID"""
        if not ObjectId.is_valid(request_id):
            raise RentalRequestNotFoundError(request_id)

        db = mongodb.get_database()
        doc = await db.rental_requests.find_one({"_id": ObjectId(request_id)})
        if not doc:
            raise RentalRequestNotFoundError(request_id)
        return RentalRequest.from_db_doc(doc)

    async def get_request_for_user(self, request_id: str, user_id: str) -> RentalRequest:
        """Get a rental request, checking that it belongs to the user"""
        request = await self.get_request(request_id)
        if str(request.user_id) != str(user_id):
            raise RentalRequestPermissionError(request_id, user_id)
        return request

    async def list_requests_for_user(
        self, user_id: str, status: Optional[RentalRequestStatus] = None
    ) -> List[RentalRequest]:
        """Get a user's rental requests, newest first"""
        try:
            db = mongodb.get_database()
            query: Dict[str, Any] = {"user": to_object_id(user_id)}
            if status is not None:
                query["status"] = status.value

            requests = []
            async for doc in db.rental_requests.find(query).sort("createdAt", -1):
                requests.append(RentalRequest.from_db_doc(doc))
            return requests
        except Exception as e:
            logger.error("Error getting rental requests for user %s: %s", user_id, e)
            return []

    async def list_open_requests(
        self, property_type: Optional[str] = None, location: Optional[str] = None
    ) -> List[RentalRequest]:
        """Get active and matched rental requests, newest first"""
        try:
            db = mongodb.get_database()
            query: Dict[str, Any] = {"status": {"$in": [s.value for s in OPEN_REQUEST_STATUSES]}}
            if property_type:
                query["propertyTypes"] = property_type
            if location:
                query["$or"] = [{"location.cities": location}, {"location.districts": location}]

            requests = []
            async for doc in db.rental_requests.find(query).sort("createdAt", -1):
                requests.append(RentalRequest.from_db_doc(doc))
            return requests
        except Exception as e:
            logger.error("Error getting open rental requests: %s", e)
            return []

    async def populate_matched_properties(self, requests: List[RentalRequest]) -> List[Dict[str, Any]]:
        """Serialize requests with each matched property id replaced by its listing summary"""
        property_ids = list(dict.fromkeys(pid for request in requests for pid in request.matched_properties))
        properties = await self.catalog.get_properties_by_ids(property_ids) if property_ids else []
        summaries = {prop.id: prop.to_summary().model_dump(by_alias=True, mode="json") for prop in properties}

        data = []
        for request in requests:
            item = request.model_dump(by_alias=True, mode="json")
            item["matchedProperties"] = [summaries[pid] for pid in request.matched_properties if pid in summaries]
            data.append(item)
        return data

    # ==================== WRITE ====================

    async def create_request(
        self, user_id: str, payload: RentalRequestCreate
    ) -> Tuple[RentalRequest, List[MatchedProperty]]:
        """Create a rental request and match it against the catalog"""
        missing = [name for name in ("purpose", "budget") if getattr(payload, name) is None]
        if missing:
            raise RentalRequestValidationError(f"Missing required fields: {', '.join(missing)}")
        validate_budget(payload.budget)

        location = payload.location
        requirements = payload.requirements
        contact = payload.contact_preferences

        request = RentalRequest(
            user_id=user_id,
            property_types=payload.property_types,
            purpose=payload.purpose,
            location={
                "cities": (location.cities if location else None) or [],
                "districts": (location.districts if location else None) or [],
                "flexible": bool(location and location.flexible),
            },
            budget={
                "min": payload.budget.min,
                "max": payload.budget.max,
                "currency": payload.budget.currency or settings.DEFAULT_CURRENCY,
                "frequency": payload.budget.frequency,
            },
            requirements=requirements.model_dump() if requirements else {},
            amenities=payload.amenities,
            move_in_date=payload.move_in_date,
            duration_months=payload.duration_months,
            occupants=payload.occupants,
            has_pets=payload.has_pets,
            pet_details=payload.pet_details,
            additional_notes=payload.additional_notes,
            contact_preferences={
                "email": not (contact and contact.email is False),
                "sms": bool(contact and contact.sms),
                "whatsapp": bool(contact and contact.whatsapp),
            },
        )

        db = mongodb.get_database()
        result = await db.rental_requests.insert_one(request.to_db_dict())
        request.id = str(result.inserted_id)
        logger.info("Created rental request %s for user %s", request.id, user_id)

        matches = await self.matching_service.find_matches(request)
        request = await self.save_match_result(request, matches)
        return request, matches

    async def update_request(
        self, request_id: str, user_id: str, update: RentalRequestUpdate
    ) -> RentalRequest:
        """Apply a partial update; criteria changes trigger a full rematch"""
        request = await self.get_request_for_user(request_id, user_id)
        changes = update.model_dump(exclude_unset=True)
        data = request.model_dump()

        if changes.get("status") is not None:
            target = RentalRequestStatus(changes["status"])
            # matched is only ever set by a match result
            if target == RentalRequestStatus.MATCHED and request.status != target:
                raise InvalidStatusTransitionError(request.status.value, target.value)
            if not request.can_transition_to(target):
                raise InvalidStatusTransitionError(request.status.value, target.value)
            data["status"] = target

        for field in ("additional_notes", "duration_months", "occupants", "pet_details"):
            if field in changes:
                data[field] = changes[field]

        if changes.get("contact_preferences"):
            data["contact_preferences"].update(_without_none(changes["contact_preferences"]))

        criteria_changed = False

        if changes.get("property_types") is not None:
            data["property_types"] = changes["property_types"]
            criteria_changed = True

        if changes.get("location"):
            data["location"].update(_without_none(changes["location"]))
            criteria_changed = True

        if changes.get("budget"):
            data["budget"].update(_without_none(changes["budget"]))
            validate_budget(BudgetInput(**data["budget"]))
            criteria_changed = True

        if changes.get("requirements"):
            for key, bounds in changes["requirements"].items():
                if bounds is None:
                    continue
                merged = dict(data["requirements"].get(key) or {})
                merged.update(bounds)
                data["requirements"][key] = merged
            criteria_changed = True

        if changes.get("amenities") is not None:
            data["amenities"] = changes["amenities"]
            criteria_changed = True

        if "move_in_date" in changes:
            data["move_in_date"] = changes["move_in_date"]
            criteria_changed = True

        if changes.get("has_pets") is not None:
            data["has_pets"] = changes["has_pets"]
            criteria_changed = True

        data["updated_at"] = datetime.now(timezone.utc)
        try:
            updated = RentalRequest(**data)
        except ValidationError as e:
            raise RentalRequestValidationError(f"Invalid rental request update: {e.errors()[0]['msg']}") from e

        if criteria_changed:
            matches = await self.matching_service.find_matches(updated)
            updated = apply_match_result(updated, matches)
            logger.info("Rematched rental request %s after criteria change: %d matches", request_id, len(matches))

        db = mongodb.get_database()
        await db.rental_requests.update_one({"_id": ObjectId(request_id)}, {"$set": updated.to_db_dict()})
        logger.info("Updated rental request %s", request_id)
        return updated

    async def cancel_request(self, request_id: str, user_id: str) -> RentalRequest:
        """Soft delete a rental request by moving it to cancelled"""
        request = await self.get_request_for_user(request_id, user_id)
        if not request.can_transition_to(RentalRequestStatus.CANCELLED):
            raise InvalidStatusTransitionError(request.status.value, RentalRequestStatus.CANCELLED.value)

        now = datetime.now(timezone.utc)
        db = mongodb.get_database()
        await db.rental_requests.update_one(
            {"_id": ObjectId(request_id)},
            {"$set": {"status": RentalRequestStatus.CANCELLED.value, "updatedAt": now}},
        )
        logger.info("Cancelled rental request %s", request_id)
        return request.model_copy(update={"status": RentalRequestStatus.CANCELLED, "updated_at": now})

    async def rematch_request(
        self, request_id: str, user_id: str
    ) -> Tuple[RentalRequest, List[MatchedProperty]]:
        """Rescan the catalog for a request and store the fresh result"""
        request = await self.get_request_for_user(request_id, user_id)
        matches = await self.matching_service.find_matches(request)
        request = await self.save_match_result(request, matches)
        return request, matches

    async def save_match_result(self, request: RentalRequest, matches: List[MatchedProperty]) -> RentalRequest:
        """Overwrite the request's matched properties (and status) with a match result"""
        updated = apply_match_result(request, matches)
        updated.updated_at = datetime.now(timezone.utc)

        db = mongodb.get_database()
        await db.rental_requests.update_one(
            {"_id": ObjectId(request.id)},
            {
                "$set": {
                    "matchedProperties": to_object_ids(updated.matched_properties),
                    "status": updated.status.value,
                    "updatedAt": updated.updated_at,
                }
            },
        )
        logger.info(
            "Stored %d matched properties for rental request %s (status=%s)",
            len(updated.matched_properties),
            request.id,
            updated.status.value,
        )
        return updated


def _without_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
