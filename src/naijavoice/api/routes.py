"""
naijavoice API Routes.

Endpoints:
    GET  /api/health           Liveness info and request count
    GET  /api/voices           Voice catalog
    POST /api/synthesize       Validate, count, queue, return placeholder audio
    POST /api/demo-sample      Placeholder audio for a voice's demo sentence
    GET  /api/order/{id}       Status of an order held in memory
    GET  /api/download/{id}    Redirect to a mailto: link for the audio
    POST /api/contact          Contact form (logged only)
    GET  /api/analytics        Usage counters
    GET  /metrics              Prometheus metrics

Error Handling:
    Errors share one JSON shape:
    {
        "ok": false,
        "error": "<human readable message>",
        "code": "<ERROR_CODE>"
    }

    HTTP status codes by error code:
        - EMPTY_INPUT, TEXT_TOO_LONG, INVALID_TEXT -> 400 Bad Request
        - NOT_FOUND -> 404 Not Found (also non-numeric order ids)
        - INTERNAL_ERROR -> 500 Internal Server Error (no details leaked)

Example Usage:
    >>> import requests
    >>> r = requests.post(
    ...     "http://localhost:5000/api/synthesize",
    ...     json={"text": "Hello Lagos", "voice": "lagos-female"},
    ... )
    >>> r.json()["status"]
    'queued'
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse, RedirectResponse

from naijavoice.api.dependencies import get_synthesis_service
from naijavoice.api.schemas import (
    AnalyticsResponse,
    ContactBody,
    ContactResponse,
    DemoSampleBody,
    DemoSampleResponse,
    SynthesizeBody,
    VoicesResponse,
)
from naijavoice.core.logging import error, get_logger, set_request_id
from naijavoice.core.metrics import metrics
from naijavoice.services.synthesis_service import (
    ErrorCode,
    OrderNotFoundError,
    ServiceError,
    SynthesisService,
)
from naijavoice.services.validators import ValidationError

router = APIRouter()

_LOG = get_logger("naijavoice.api")

STATUS_MAP = {
    ErrorCode.EMPTY_INPUT: 400,
    ErrorCode.TEXT_TOO_LONG: 400,
    ErrorCode.INVALID_TEXT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def _new_request_id() -> str:
    rid = str(uuid.uuid4())[:12]
    set_request_id(rid)
    return rid


def internal_error_body(rid: str | None = None) -> dict:
    """Generic 500 body. Never includes exception details."""
    body = {"ok": False, "error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR}
    if rid:
        body["request_id"] = rid
    return body


@router.get("/api/health")
def health(service: SynthesisService = Depends(get_synthesis_service)):
    """Liveness check for load balancers and uptime monitors."""
    _new_request_id()
    metrics.record_request("health", "success")
    return service.get_health_info()


@router.get("/api/voices", response_model=VoicesResponse)
def list_voices(service: SynthesisService = Depends(get_synthesis_service)):
    """All voices in catalog order."""
    _new_request_id()
    metrics.record_request("voices", "success")
    return {"voices": [v.to_dict() for v in service.list_voices()]}


@router.post("/api/synthesize")
def synthesize(
    req: SynthesizeBody,
    service: SynthesisService = Depends(get_synthesis_service),
):
    """
    Accept text for synthesis.

    Returns 200 with the order id and placeholder audio URL, 400 when the
    text is empty or longer than the limit, 500 on unexpected failures.

    Example:
        curl -X POST http://localhost:5000/api/synthesize \\
            -H "Content-Type: application/json" \\
            -d '{"text": "Hello Lagos", "voice": "lagos-female"}'
    """
    rid = _new_request_id()

    try:
        result = service.synthesize(req.text, req.voice, req.speed)

    except ValidationError as e:
        metrics.record_request("synthesize", "rejected")
        return JSONResponse(status_code=400, content=e.to_dict(), headers={"X-Request-Id": rid})

    except ServiceError as e:
        metrics.record_request("synthesize", "error")
        status_code = STATUS_MAP.get(e.code, 500)
        content = e.to_dict() if status_code < 500 else internal_error_body(rid)
        return JSONResponse(status_code=status_code, content=content, headers={"X-Request-Id": rid})

    except Exception:
        # Log internally, never expose details
        error(_LOG, "synthesize_unhandled", exc_info=True)
        metrics.record_request("synthesize", "error")
        return JSONResponse(status_code=500, content=internal_error_body(rid), headers={"X-Request-Id": rid})

    metrics.record_request("synthesize", "success")
    return JSONResponse(content=result.to_dict(), headers={"X-Request-Id": rid})


@router.post("/api/demo-sample", response_model=DemoSampleResponse)
def demo_sample(
    req: DemoSampleBody,
    service: SynthesisService = Depends(get_synthesis_service),
):
    """Placeholder audio for the demo sentence of a voice. Not counted."""
    rid = _new_request_id()
    try:
        result = service.demo_sample(req.voice)
    except ValidationError as e:
        metrics.record_request("demo_sample", "rejected")
        return JSONResponse(status_code=400, content=e.to_dict(), headers={"X-Request-Id": rid})

    metrics.record_request("demo_sample", "success")
    return result


@router.get("/api/order/{order_id}")
def order_status(
    order_id: str,
    service: SynthesisService = Depends(get_synthesis_service),
):
    """Status of an order created by this process; 404 if non-numeric, unknown or evicted."""
    _new_request_id()
    try:
        order = service.get_order(order_id)
    except OrderNotFoundError as e:
        metrics.record_request("order", "rejected")
        return JSONResponse(status_code=404, content=e.to_dict())

    metrics.record_request("order", "success")
    return {
        "id": order.id,
        "status": order.status,
        "voice": order.voice,
        "createdAt": order.timestamp,
        "estimatedMinutes": order.estimated_minutes,
        "downloadUrl": f"/api/download/{order.id}",
    }


@router.get("/api/download/{order_id}")
def download(
    order_id: str,
    service: SynthesisService = Depends(get_synthesis_service),
):
    """Audio is delivered by email for now: redirect to a prefilled mailto link."""
    _new_request_id()
    try:
        link = service.download_link(order_id)
    except OrderNotFoundError as e:
        metrics.record_request("download", "rejected")
        return JSONResponse(status_code=404, content=e.to_dict())

    metrics.record_request("download", "success")
    return RedirectResponse(url=link, status_code=302)


@router.post("/api/contact", response_model=ContactResponse)
def contact(
    req: ContactBody,
    service: SynthesisService = Depends(get_synthesis_service),
):
    _new_request_id()
    reply = service.submit_contact(
        name=req.name,
        email=req.email,
        message=req.message,
        order_type=req.order_type,
    )
    metrics.record_request("contact", "success")
    return {"success": True, "message": reply}


@router.get("/api/analytics", response_model=AnalyticsResponse)
def analytics(service: SynthesisService = Depends(get_synthesis_service)):
    """Usage counters since the process started."""
    _new_request_id()
    snap = service.analytics()
    metrics.record_request("analytics", "success")
    return {
        "totalRequests": snap.total_requests,
        "totalCharacters": snap.total_characters,
        "averageLength": snap.average_length,
        "uniqueUsers": snap.unique_users,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Prometheus text format."""
    content, content_type = metrics.get_metrics_response()
    return Response(content=content, media_type=content_type)
