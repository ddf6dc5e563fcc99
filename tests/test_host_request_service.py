"""
Tests for the host-facing view of open rental requests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rentmatch.services.host_request_service import HostRequestService
from rentmatch.services.matching_service import MatchingService
from rentmatch.services.rental_request_service import RentalRequestService
from tests.test_utils import HOST_ID, make_property, make_request


class TestHostRequestService:
    """Test class for HostRequestService"""

    @pytest.fixture
    def request_service(self):
        service = MagicMock(spec=RentalRequestService)
        service.list_open_requests = AsyncMock(return_value=[])
        return service

    @pytest.fixture
    def service(self, mock_catalog, request_service, matching_service):
        return HostRequestService(
            catalog=mock_catalog, request_service=request_service, matching_service=matching_service
        )

    @pytest.mark.asyncio
    async def test_no_host_properties(self, service, mock_catalog, request_service):
        result = await service.get_matching_requests(HOST_ID)

        assert result == []
        mock_catalog.get_active_properties_for_owner.assert_called_once_with(HOST_ID)
        request_service.list_open_requests.assert_not_called()

    @pytest.mark.asyncio
    async def test_requests_ranked_by_best_property(self, service, mock_catalog, request_service):
        garden = make_property(price=65000, title="Garden apartment")
        studio = make_property(price=52000, title="Studio", amenities=[])
        mock_catalog.get_active_properties_for_owner.return_value = [studio, garden]

        wants_parking = make_request(amenities=["parking"])            # garden 115, studio 95
        wants_villa_budget = make_request(budget={"min": 200000, "max": 300000, "frequency": "monthly"})
        wants_pool = make_request(amenities=["pool"], has_pets=True)   # garden 95, studio 90
        request_service.list_open_requests.return_value = [wants_pool, wants_villa_budget, wants_parking]

        result = await service.get_matching_requests(HOST_ID, property_type="apartment", location="Colombo")

        request_service.list_open_requests.assert_called_once_with("apartment", "Colombo")
        assert [r.request["id"] for r in result] == [wants_parking.id, wants_pool.id]

        top = result[0]
        assert top.relevance_score == 115
        assert top.matching_property_count == 2
        assert [m.property_id for m in top.matching_properties] == [garden.id, studio.id]
        assert [m.property_title for m in top.matching_properties] == ["Garden apartment", "Studio"]

    @pytest.mark.asyncio
    async def test_purpose_must_agree(self, service, mock_catalog, request_service):
        mock_catalog.get_active_properties_for_owner.return_value = [make_property(purpose="booking")]
        request_service.list_open_requests.return_value = [make_request(purpose="rent")]

        assert await service.get_matching_requests(HOST_ID) == []

    @pytest.mark.asyncio
    async def test_rent_frequency_must_agree(self, service, mock_catalog, request_service):
        monthly = make_property(title="Monthly lease")
        weekly = make_property(price=60000, title="Weekly let", rentFrequency="weekly")
        mock_catalog.get_active_properties_for_owner.return_value = [weekly, monthly]
        request_service.list_open_requests.return_value = [make_request()]

        result = await service.get_matching_requests(HOST_ID)

        assert len(result) == 1
        assert result[0].matching_property_count == 1
        assert [m.property_title for m in result[0].matching_properties] == ["Monthly lease"]

    @pytest.mark.asyncio
    async def test_weekly_listings_do_not_match_monthly_budgets(self, service, mock_catalog, request_service):
        mock_catalog.get_active_properties_for_owner.return_value = [make_property(rentFrequency="weekly")]
        request_service.list_open_requests.return_value = [make_request()]

        assert await service.get_matching_requests(HOST_ID) == []

    @pytest.mark.asyncio
    async def test_budget_only_scoring_never_matches(self, mock_catalog, request_service):
        service = HostRequestService(
            catalog=mock_catalog,
            request_service=request_service,
            matching_service=MatchingService(catalog=mock_catalog, threshold=50, full_single_pair_scoring=False),
        )
        mock_catalog.get_active_properties_for_owner.return_value = [make_property()]
        request_service.list_open_requests.return_value = [make_request()]

        assert await service.get_matching_requests(HOST_ID) == []
