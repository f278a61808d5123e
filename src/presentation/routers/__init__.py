"""External-facing routers (non-versioned endpoints).

OAuth callbacks are dictated by the redirect URL registered with Payoneer,
not by an API versioning strategy.
"""

from src.presentation.routers.oauth_callbacks import oauth_router
from src.presentation.routers.system import system_router

__all__ = ["oauth_router", "system_router"]
