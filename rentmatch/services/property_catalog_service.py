import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from rentmatch.db.mongodb import mongodb
from rentmatch.models.property import Property
from rentmatch.models.status_enums import PropertyStatus
from rentmatch.utils.object_id_utils import to_object_id, to_object_ids

logger = logging.getLogger(__name__)


class PropertyCatalogService:
    """Read-only access to the property catalog"""

    async def find_properties(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Property]:
        """Fetch properties matching a catalog filter in a stable (insertion) order"""
        db = mongodb.get_database()

        cursor = db.properties.find(query).sort("_id", 1)
        if limit:
            cursor = cursor.limit(limit)

        properties = []
        async for doc in cursor:
            try:
                properties.append(Property.from_db_doc(doc))
            except ValidationError as e:
                logger.warning("Skipping malformed property %s: %s", doc.get("_id"), e)

        if limit and len(properties) >= limit:
            logger.warning("Catalog query hit the candidate limit of %s: %s", limit, query)

        return properties

    async def get_active_properties_for_owner(self, owner_id: str) -> List[Property]:
        """Get all active properties owned by a host"""
        return await self.find_properties(
            {"owner": to_object_id(owner_id), "status": PropertyStatus.ACTIVE.value}
        )

    async def get_properties_by_ids(self, property_ids: List[str]) -> List[Property]:
        """Get properties by id in the given order; ids missing from the catalog are skipped"""
        if not property_ids:
            return []

        found = await self.find_properties({"_id": {"$in": to_object_ids(property_ids)}})
        by_id = {prop.id: prop for prop in found}
        return [by_id[property_id] for property_id in property_ids if property_id in by_id]
