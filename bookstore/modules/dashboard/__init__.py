"""Dashboard module"""

from .service import DashboardService
from .router import router, get_dashboard_service, get_ai_client

__all__ = ["DashboardService", "router", "get_dashboard_service", "get_ai_client"]
