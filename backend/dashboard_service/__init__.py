from dashboard_service.routing_modules.dashboard_routing import router as dashboard_router
from dashboard_service.logic_modules.reconciliation import reconcile

__all__ = ["dashboard_router", "reconcile"]
