"""
API v1 router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from partmatch.api.v1.endpoints import health, listings, match_requests, matches, users

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
api_router.include_router(match_requests.router, prefix="/match-requests", tags=["match-requests"])
api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
