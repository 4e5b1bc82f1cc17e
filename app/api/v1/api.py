# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, bookings, events, profile, stats, users

# Create main API router
api_router = APIRouter()

# Include all endpoint routers with proper configuration
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    profile.router,
    prefix="/profile",
    tags=["profile-management"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["bookings"]
)

api_router.include_router(
    stats.router,
    prefix="/stats",
    tags=["statistics"]
)
