from __future__ import annotations

from dashboard_service.logic_modules.presentation import build_presentation
from dashboard_service.logic_modules.reconciliation import reconcile
from dashboard_service.schema_modules.input_schemas import ReconcileRequest, StatsSnapshot
from dashboard_service.schema_modules.response_schemas import DashboardResponse, DashboardView

__all__ = ["build_dashboard_response", "reconcile_payload"]


def build_dashboard_response(view: DashboardView) -> DashboardResponse:
    return DashboardResponse(view=view, presentation=build_presentation(view))


def reconcile_payload(payload: ReconcileRequest) -> DashboardResponse:
    """
    Reconcile caller-supplied source data:
    1. Normalise and merge logs with the forecast bundle.
    2. Summarise the next forecast.
    3. Assemble the view and its display strings.
    """

    result = reconcile(payload.logs, payload.forecast)
    view = DashboardView(
        request_seq=0,
        stats=payload.stats or StatsSnapshot(),
        series=result.series,
        summary=result.summary,
    )
    return build_dashboard_response(view)
