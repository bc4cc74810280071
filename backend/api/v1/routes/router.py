from fastapi import APIRouter

from api.v1.routes import (
    health,
)
from packages.events.routes import events
from packages.rsvp.routes import rsvp
from packages.subscriptions.routes import subscriptions
from packages.search.routes import search

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(rsvp.router, prefix="/events", tags=["rsvp"])
api_router.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["subscriptions"]
)
api_router.include_router(search.router, prefix="/search", tags=["search"])
