"""API routers."""

from evernest.api.health import router as health_router
from evernest.api.profile import router as profile_router
from evernest.api.stories import router as stories_router
from evernest.api.users import router as users_router

__all__ = [
    "health_router",
    "profile_router",
    "stories_router",
    "users_router",
]
