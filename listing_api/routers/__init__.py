"""
API route handlers for the Property Watch API.
Provides organized routing for different API endpoints.
"""

from .auth import router as auth_router
from .users import router as users_router
from .properties import router as properties_router
from .events import router as events_router
from .watchlists import router as watchlists_router

__all__ = ["auth_router", "users_router", "properties_router", "events_router", "watchlists_router"]
