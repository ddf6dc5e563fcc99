import logging

from rentmatch.db.mongodb import mongodb

logger = logging.getLogger(__name__)


async def init_database():
    """Initialize database with collections and indexes"""
    try:
        db = mongodb.get_database()

        # Catalog lookups used by the matcher prefilter and the host view
        await db.properties.create_index([("purpose", 1), ("status", 1)])
        await db.properties.create_index("type")
        await db.properties.create_index("address.city")
        await db.properties.create_index("address.district")
        await db.properties.create_index("owner")

        # Rental requests
        await db.rental_requests.create_index([("user", 1), ("status", 1)])
        await db.rental_requests.create_index([("status", 1), ("createdAt", -1)])
        await db.rental_requests.create_index("location.cities")
        await db.rental_requests.create_index("location.districts")
        await db.rental_requests.create_index("propertyTypes")
        await db.rental_requests.create_index("purpose")
        await db.rental_requests.create_index([("budget.min", 1), ("budget.max", 1)])

        logger.info("Database indexes created successfully")

    except Exception as e:
        logger.error("Error initializing database: %s", e)
        raise
