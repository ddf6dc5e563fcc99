"""
Services module initialization
"""

from rentmatch.services.matching_service import MatchingService

# Global service instances
_matching_service: MatchingService | None = None


def get_matching_service() -> MatchingService:
    """Get the global matching service instance (singleton)"""
    global _matching_service
    if _matching_service is None:
        _matching_service = MatchingService()
    return _matching_service


def set_matching_service(service: MatchingService) -> None:
    """Set the global matching service instance"""
    global _matching_service
    _matching_service = service
