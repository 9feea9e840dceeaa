from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request

from detection.distance import estimate_distance
from runtime.services import NavigationService
from ..api_models import ControlResponse, DetectionsResponse, HealthResponse, StatusResponse
from ..services.health_service import HealthService
from ..state import WebPresentationState

router = APIRouter()


def _service(request: Request) -> NavigationService:
    return request.app.state.service


def _web_state(request: Request) -> WebPresentationState:
    return request.app.state.web_state


def _control_payload(service: NavigationService, web_state: WebPresentationState, ok: bool) -> Dict[str, Any]:
    return {"ok": ok, "running": service.is_running, "status": web_state.get_status()}


@router.get("/status", response_model=StatusResponse)
def status(request: Request):
    """
    Everything the control page renders:
    - ready/running flags
    - latest status line and per-class object counts
    - polling loop stats (ticks, failures, last error)
    """
    service = _service(request)
    web_state = _web_state(request)
    snap = web_state.snapshot()
    return {
        "ready": service.is_ready,
        "running": service.is_running,
        "status": snap["status"],
        "objects": snap["objects"],
        "empty_text": web_state.phrases.no_objects,
        "count_unit": web_state.phrases.count_unit,
        "setup_error": service.setup_error,
        "uptime_seconds": snap["uptime_seconds"],
        "driver": service.driver.stats.to_dict(),
    }


@router.get("/detections", response_model=DetectionsResponse)
def detections(request: Request):
    """Detections from the latest successful tick, with distance estimates."""
    service = _service(request)
    ctx = service.ctx
    items = []
    for det in list(ctx.last_detections):
        item = det.to_dict()
        item["distance"] = estimate_distance(det.bbox, ctx.phrases.distance_labels).to_dict()
        items.append(item)
    return {
        "timestamp": ctx.last_detections_ts or None,
        "count": len(items),
        "detections": items,
    }


@router.post("/start", response_model=ControlResponse)
def start(request: Request):
    service = _service(request)
    ok = service.start()
    return _control_payload(service, _web_state(request), ok)


@router.post("/stop", response_model=ControlResponse)
def stop(request: Request):
    service = _service(request)
    ok = service.stop()
    return _control_payload(service, _web_state(request), ok)


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    return HealthService(service=_service(request)).get_health_summary()
