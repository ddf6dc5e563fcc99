"""
Tests for the bulk matcher, the single property check and match write-back state
"""

from bson import ObjectId

import pytest

from rentmatch.models.status_enums import RentalRequestStatus
from rentmatch.services.matching_service import MatchingService, apply_match_result
from rentmatch.services.match_scorer import score_property
from tests.test_utils import make_property, make_request, property_ids


class TestFindMatches:
    """Test class for MatchingService.find_matches"""

    @pytest.fixture
    def scenario_request(self):
        return make_request(requirements={"bedrooms": {"min": 2}}, amenities=["parking"])

    @pytest.mark.asyncio
    async def test_end_to_end_scenario(self, matching_service, mock_catalog, scenario_request):
        """Property A matches with 115, identical property B over budget is excluded"""
        property_a = make_property(price=65000, bedrooms=3, amenities=["parking", "wifi"])
        property_b = make_property(price=90000, bedrooms=3, amenities=["parking", "wifi"])
        mock_catalog.find_properties.return_value = [property_a, property_b]

        matches = await matching_service.find_matches(scenario_request)

        assert property_ids(matches) == [property_a.id]
        assert matches[0].score == 115

    @pytest.mark.asyncio
    async def test_queries_catalog_with_prefilter_and_limit(self, mock_catalog, scenario_request):
        service = MatchingService(catalog=mock_catalog, threshold=50, candidate_limit=25)

        await service.find_matches(scenario_request)

        mock_catalog.find_properties.assert_called_once_with(
            {"status": "active", "purpose": "rent", "rentFrequency": "monthly"}, limit=25
        )

    @pytest.mark.asyncio
    async def test_no_candidates(self, matching_service, scenario_request):
        assert await matching_service.find_matches(scenario_request) == []

    @pytest.mark.asyncio
    async def test_out_of_budget_never_returned(self, matching_service, mock_catalog):
        request = make_request(location={"flexible": True})
        cheap = make_property(price=10000)
        expensive = make_property(price=500000)
        mock_catalog.find_properties.return_value = [cheap, expensive]

        assert await matching_service.find_matches(request) == []

    @pytest.mark.asyncio
    async def test_sorted_and_stable(self, matching_service, mock_catalog):
        request = make_request(amenities=["wifi", "pool"])
        tie_1 = make_property(amenities=["wifi"])
        best = make_property(amenities=["wifi", "pool"])
        tie_2 = make_property(amenities=["pool"])
        mock_catalog.find_properties.return_value = [tie_1, best, tie_2]

        matches = await matching_service.find_matches(request)

        assert property_ids(matches) == [best.id, tie_1.id, tie_2.id]

    @pytest.mark.asyncio
    async def test_idempotent(self, matching_service, mock_catalog, scenario_request):
        mock_catalog.find_properties.return_value = [make_property(), make_property(price=52000)]

        first = await matching_service.find_matches(scenario_request)
        second = await matching_service.find_matches(scenario_request)

        assert [(m.property.id, m.score) for m in first] == [(m.property.id, m.score) for m in second]
        assert apply_match_result(scenario_request, first).matched_properties == \
            apply_match_result(scenario_request, second).matched_properties


class TestCheckMatch:
    """Test class for MatchingService.check_match"""

    def test_full_scoring_matches_bulk_score(self, matching_service):
        request = make_request(amenities=["parking"])
        prop = make_property()

        check = matching_service.check_match(prop, request)

        assert check.matches is True
        assert check.score == score_property(prop, request).score
        assert check.details["budgetMatch"] is True
        assert check.details["amenitiesMatch"] == 100

    def test_inactive_property_does_not_match(self, matching_service):
        check = matching_service.check_match(make_property(status="rented"), make_request())

        assert check.matches is False
        assert check.score == 0

    def test_purpose_mismatch_does_not_match(self, matching_service):
        check = matching_service.check_match(make_property(purpose="sale"), make_request())

        assert check.matches is False
        assert check.score == 0

    @pytest.mark.parametrize("full_scoring", [True, False])
    def test_rent_frequency_must_agree(self, mock_catalog, full_scoring):
        service = MatchingService(catalog=mock_catalog, threshold=50, full_single_pair_scoring=full_scoring)
        weekly = make_property(price=60000, rentFrequency="weekly")

        check = service.check_match(weekly, make_request())

        assert check.matches is False
        assert check.score == 0
        assert check.details == {}

    def test_booking_frequency_must_agree(self, matching_service):
        request = make_request(purpose="booking", budget={"min": 5000, "max": 9000, "frequency": "daily"})

        daily_listing = make_property(purpose="booking", price=7000, rentFrequency="daily")
        weekly_listing = make_property(purpose="booking", price=7000, rentFrequency="weekly")

        assert matching_service.check_match(daily_listing, request).matches is True
        assert matching_service.check_match(weekly_listing, request).matches is False

    def test_out_of_budget(self, matching_service):
        check = matching_service.check_match(make_property(price=90000), make_request())

        assert check.matches is False
        assert check.score == 0
        assert check.details == {"budgetMatch": False}

    def test_type_awarded_even_when_not_requested(self, matching_service):
        # Single property checks do not re-run the catalog type filter
        request = make_request(propertyTypes=["villa"])

        check = matching_service.check_match(make_property(type="apartment"), request)

        assert check.matches is True
        assert check.details["typeMatch"] is True

    def test_budget_only_scoring_stops_after_budget(self, mock_catalog):
        service = MatchingService(catalog=mock_catalog, threshold=50, full_single_pair_scoring=False)

        check = service.check_match(make_property(), make_request())

        assert check.score == 30
        assert check.matches is False
        assert check.details == {"budgetMatch": True}

    def test_budget_only_scoring_out_of_budget(self, mock_catalog):
        service = MatchingService(catalog=mock_catalog, threshold=50, full_single_pair_scoring=False)

        check = service.check_match(make_property(price=1), make_request())

        assert check.score == 0
        assert check.details == {}


class TestApplyMatchResult:
    """Test class for computing request state from a match result"""

    def _matches(self, request, *props):
        return [score_property(p, request) for p in props]

    def test_active_request_becomes_matched(self):
        request = make_request()
        prop = make_property()

        updated = apply_match_result(request, self._matches(request, prop))

        assert updated.status == RentalRequestStatus.MATCHED
        assert updated.matched_properties == [prop.id]
        assert request.status == RentalRequestStatus.ACTIVE

    def test_empty_result_keeps_active(self):
        request = make_request()

        updated = apply_match_result(request, [])

        assert updated.status == RentalRequestStatus.ACTIVE
        assert updated.matched_properties == []

    def test_matched_request_does_not_revert_when_matches_disappear(self):
        request = make_request(status="matched", matchedProperties=[str(ObjectId())])

        updated = apply_match_result(request, [])

        assert updated.status == RentalRequestStatus.MATCHED
        assert updated.matched_properties == []

    def test_result_replaces_previous_matches(self):
        old_id = str(ObjectId())
        request = make_request(status="matched", matchedProperties=[old_id])
        prop = make_property()

        updated = apply_match_result(request, self._matches(request, prop))

        assert updated.matched_properties == [prop.id]

    def test_fulfilled_request_status_untouched(self):
        request = make_request(status="fulfilled")

        updated = apply_match_result(request, self._matches(request, make_property()))

        assert updated.status == RentalRequestStatus.FULFILLED
