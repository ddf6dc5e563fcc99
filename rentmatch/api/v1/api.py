from fastapi import APIRouter

from rentmatch.api.v1.endpoints import host_rental_requests, rental_requests

api_router = APIRouter()
api_router.include_router(
    rental_requests.router, prefix="/rental-requests", tags=["rental-requests"]
)
api_router.include_router(
    host_rental_requests.router, prefix="/host/rental-requests", tags=["host"]
)
