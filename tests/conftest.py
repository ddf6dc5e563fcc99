"""
Pytest configuration and fixtures for testing
"""

import os

# Settings are read at import time
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017/test_rentmatch")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rentmatch.services.matching_service import MatchingService
from rentmatch.services.property_catalog_service import PropertyCatalogService


@pytest.fixture
def mock_catalog():
    """Catalog whose find_properties returns whatever the test sets"""
    catalog = MagicMock(spec=PropertyCatalogService)
    catalog.find_properties = AsyncMock(return_value=[])
    catalog.get_active_properties_for_owner = AsyncMock(return_value=[])
    catalog.get_properties_by_ids = AsyncMock(return_value=[])
    return catalog


@pytest.fixture
def matching_service(mock_catalog):
    """Matching service over the mock catalog with default scoring settings"""
    return MatchingService(catalog=mock_catalog, threshold=50, candidate_limit=1000, full_single_pair_scoring=True)


@pytest.fixture
def mock_request_database():
    """Mock database used by the rental request service"""
    with patch("rentmatch.services.rental_request_service.mongodb") as mock_mongodb:
        mock_db = MagicMock()
        mock_mongodb.get_database.return_value = mock_db
        mock_db.rental_requests.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
        yield mock_db


@pytest.fixture
def mock_catalog_database():
    """Mock database used by the property catalog service"""
    with patch("rentmatch.services.property_catalog_service.mongodb") as mock_mongodb:
        mock_db = MagicMock()
        mock_mongodb.get_database.return_value = mock_db
        yield mock_db
