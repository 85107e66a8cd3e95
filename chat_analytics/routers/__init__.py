from .dashboard import router as dashboard_router
from .stats import router as stats_router
from .shifts import router as shifts_router
from .pages import router as pages_router
from .reports import router as reports_router
from .users import router as users_router

__all__ = [
    "dashboard_router",
    "stats_router",
    "shifts_router",
    "pages_router",
    "reports_router",
    "users_router",
]
