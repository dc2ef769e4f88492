from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard_service.api_modules.dashboard_api import DashboardLoader, get_loader
from dashboard_service.api_modules.output_api import build_dashboard_response, reconcile_payload
from dashboard_service.schema_modules.input_schemas import ReconcileRequest
from dashboard_service.schema_modules.response_schemas import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def load_dashboard(loader: DashboardLoader = Depends(get_loader)) -> DashboardResponse:
    """
    Fetch stats, forecast and logs concurrently and return the reconciled view.
    Failed sources degrade to empty defaults instead of failing the request.
    """

    view = await loader.load()
    return build_dashboard_response(view)


@router.get("/latest", response_model=DashboardResponse)
def latest_dashboard(loader: DashboardLoader = Depends(get_loader)) -> DashboardResponse:
    """Return the most recently published view without fetching."""

    view = loader.current
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No dashboard has been loaded yet.")
    return build_dashboard_response(view)


@router.post("/reconcile", response_model=DashboardResponse)
def reconcile_endpoint(payload: ReconcileRequest) -> DashboardResponse:
    """Reconcile caller-supplied logs and forecast data without contacting the sources."""

    return reconcile_payload(payload)
