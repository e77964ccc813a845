"""
SynthesisService - the request pipeline behind the API.

Architecture:
    Request → Validate → Count usage → Record order → Placeholder engine → Response

Components (owned by the service, shared by reference with handlers):
    - VoiceCatalog: static voice profiles, fallback lookup
    - UsageAggregator: lock-guarded analytics counters
    - OrderBook: bounded in-memory order records
    - BaseSynthesisEngine: PlaceholderEngine until a real engine exists

Error Handling:
    - ValidationError (services/validators.py): EMPTY_INPUT, TEXT_TOO_LONG,
      INVALID_TEXT
    - ServiceError: base for everything else, with an ErrorCode
    - OrderNotFoundError: unknown order id
    Unexpected exceptions are logged and re-raised as ServiceError with
    INTERNAL_ERROR and a generic message; details stay in the log.

Example:
    >>> from naijavoice.core.config import Settings
    >>> service = SynthesisService(Settings(raw={}))
    >>> resp = service.synthesize("Hello Lagos", voice="lagos-female")
    >>> service.analytics().total_characters
    11
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from naijavoice import __version__
from naijavoice.core.config import ServiceConfig, Settings
from naijavoice.core.logging import error, get_logger, info, success, verbose, warn
from naijavoice.core.metrics import metrics
from naijavoice.services.orders import OrderBook, OrderRecord
from naijavoice.services.usage import UsageAggregator, UsageSnapshot
from naijavoice.services.validators import (
    SynthesisRequest,
    ValidationError,
    validate_request,
    validate_voice,
)
from naijavoice.tts.catalog import VoiceCatalog, VoiceProfile
from naijavoice.tts.engine import BaseSynthesisEngine, get_engine

_LOG = get_logger("naijavoice.service")


# =============================================================================
# Error Codes and Exceptions
# =============================================================================

class ErrorCode:
    """Error codes returned in the `code` field of error responses."""
    EMPTY_INPUT = "EMPTY_INPUT"
    TEXT_TOO_LONG = "TEXT_TOO_LONG"
    INVALID_TEXT = "INVALID_TEXT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """
    Base exception for service failures.

    Attributes:
        message: Human-readable message, safe to return to callers.
        code: Value from ErrorCode.
        details: Optional extra context.
    """

    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "ok": False,
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class OrderNotFoundError(ServiceError):
    """Raised when an order id is not in the order book or is not a number."""

    def __init__(self, order_id: int | str):
        super().__init__(f"Order {order_id} not found", ErrorCode.NOT_FOUND, {"order_id": order_id})


# =============================================================================
# Response Dataclasses
# =============================================================================

@dataclass(frozen=True)
class SynthesisResponse:
    """
    Result of an accepted synthesis request.

    audio_url holds the placeholder data URL while no real engine exists.
    voice is the id as requested; voice_name comes from the resolved
    profile, which is the fallback profile for unknown ids.
    """
    order_id: int
    status: str
    message: str
    estimated_delivery: str
    audio_url: str
    download_url: str
    voice: str
    voice_name: str
    placeholder: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "orderId": self.order_id,
            "status": self.status,
            "message": self.message,
            "estimatedDelivery": self.estimated_delivery,
            "audioUrl": self.audio_url,
            "downloadUrl": self.download_url,
            "voice": self.voice,
            "voiceName": self.voice_name,
            "placeholder": self.placeholder,
        }


GENERATING_MESSAGE = "Nigerian voice is being generated..."


def parse_order_id(raw: int | str) -> int:
    """
    Order id from a path segment.

    Raises:
        OrderNotFoundError: If raw is not a positive integer.
    """
    try:
        order_id = int(str(raw).strip())
    except ValueError as e:
        raise OrderNotFoundError(raw) from e
    if order_id <= 0:
        raise OrderNotFoundError(raw)
    return order_id


# =============================================================================
# Main Service Class
# =============================================================================

class SynthesisService:
    """
    Owns the catalog, usage counters, order book and engine.

    One instance per process (see get_service()); handlers receive it
    through FastAPI dependency injection.
    """

    def __init__(
        self,
        settings: Settings,
        engine: Optional[BaseSynthesisEngine] = None,
        usage: Optional[UsageAggregator] = None,
    ):
        self._settings = settings
        self._config = ServiceConfig.from_settings(settings)

        self._catalog = VoiceCatalog.default(fallback_id=self._config.default_voice)
        self._usage = usage or UsageAggregator()
        self._orders = OrderBook(
            max_items=self._config.orders.max_tracked,
            words_per_minute=self._config.orders.words_per_minute,
        )
        self._engine = engine or get_engine()
        self._preview_chars = self._config.logging.text_preview_chars

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def catalog(self) -> VoiceCatalog:
        return self._catalog

    @property
    def usage(self) -> UsageAggregator:
        return self._usage

    @property
    def orders(self) -> OrderBook:
        return self._orders

    @property
    def engine(self) -> BaseSynthesisEngine:
        return self._engine

    # =========================================================================
    # Voices
    # =========================================================================

    def list_voices(self) -> List[VoiceProfile]:
        return self._catalog.list_voices()

    def get_voice(self, voice_id: Optional[str]) -> VoiceProfile:
        return self._catalog.get_voice(voice_id)

    # =========================================================================
    # Synthesis
    # =========================================================================

    def validate(self, text: Optional[str], voice: Optional[str] = None, speed: Optional[float] = None) -> SynthesisRequest:
        """Validate with the configured limit, contact address and default voice."""
        return validate_request(
            text,
            voice,
            speed,
            max_length=self._config.validation.max_text_chars,
            contact_email=self._config.contact.email,
            default_voice=self._config.default_voice,
        )

    def synthesize(
        self,
        text: Optional[str],
        voice: Optional[str] = None,
        speed: Optional[float] = None,
    ) -> SynthesisResponse:
        """
        Validate, count, record and assemble a synthesis response.

        Raises:
            ValidationError: EMPTY_INPUT, TEXT_TOO_LONG or INVALID_TEXT.
            ServiceError: INTERNAL_ERROR for any unexpected failure.

        Nothing is counted or recorded unless a response is returned.
        """
        try:
            request = self.validate(text, voice, speed)
        except ValidationError as e:
            warn(_LOG, "validation_failed", code=e.code, chars=len(text or ""))
            metrics.record_validation_failure(e.code)
            raise

        preview = request.text[:self._preview_chars] if self._preview_chars > 0 else ""
        info(_LOG, "synthesize_accepted", chars=len(request.text), voice=request.voice,
             speed=request.speed, text_preview=preview)

        if request.voice not in self._catalog:
            warn(_LOG, "unknown_voice", voice=request.voice, fallback=self._catalog.fallback.id)

        try:
            result = self._engine.synthesize(request.text, request.voice, request.speed)
        except Exception as e:
            error(_LOG, "synthesize_failed", exc_info=True, error_type=type(e).__name__)
            raise ServiceError("Internal server error", ErrorCode.INTERNAL_ERROR) from e

        # Only requests that produced audio are counted and recorded
        self._usage.record_accepted(len(request.text))
        metrics.record_characters(len(request.text))

        order = self._orders.create(request)
        metrics.set_orders_tracked(len(self._orders))
        verbose(_LOG, "order_recorded", order_id=order.id,
                estimated_minutes=order.estimated_minutes)

        profile = self._catalog.get_voice(request.voice)
        success(_LOG, "order_queued", order_id=order.id)

        return SynthesisResponse(
            order_id=order.id,
            status=order.status,
            message=GENERATING_MESSAGE,
            estimated_delivery=self._config.orders.estimated_delivery,
            audio_url=result.audio_url,
            download_url=f"/api/download/{order.id}",
            voice=request.voice,
            voice_name=profile.name,
            placeholder=result.placeholder,
        )

    def demo_sample(self, voice: Optional[str] = None) -> Dict[str, Any]:
        """
        Placeholder audio of the voice's demo sentence. Not counted as usage.

        Raises:
            InvalidTextError: If the voice id cannot be encoded.
        """
        voice_id = validate_voice(voice, self._config.default_voice)
        text = self._catalog.demo_text(voice_id)
        result = self._engine.synthesize(text, voice_id)
        verbose(_LOG, "demo_sample", voice=voice_id)
        return {"success": True, "audioUrl": result.audio_url, "text": text}

    # =========================================================================
    # Orders
    # =========================================================================

    def get_order(self, order_id: int | str) -> OrderRecord:
        """
        Raises:
            OrderNotFoundError: If the id is not numeric, or the order is
                unknown or was evicted.
        """
        order = self._orders.get(parse_order_id(order_id))
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def download_link(self, order_id: int | str) -> str:
        """
        mailto: link asking the team for an order's audio.

        The order book is not consulted; any numeric id gets a link.

        Raises:
            OrderNotFoundError: If the id is not numeric.
        """
        order_id = parse_order_id(order_id)
        subject = quote("Download Request")
        body = quote(f"Please send me the audio for order {order_id}")
        return f"mailto:{self._config.contact.email}?subject={subject}&body={body}"

    # =========================================================================
    # Contact
    # =========================================================================

    def submit_contact(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        message: Optional[str] = None,
        order_type: Optional[str] = None,
    ) -> str:
        """Log a contact submission and return the acknowledgement text."""
        info(_LOG, "contact_received", name=name, email=email,
             order_type=order_type, message_chars=len(message or ""))
        return self._config.contact.reply_message

    # =========================================================================
    # Analytics / Health
    # =========================================================================

    def analytics(self) -> UsageSnapshot:
        return self._usage.snapshot()

    def get_health_info(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "engine": self._engine.name,
            "voicesAvailable": len(self._catalog),
            "totalRequests": self._usage.total_requests,
            "orders": self._orders.stats(),
        }


# =============================================================================
# Global Service Singleton
# =============================================================================

_service: Optional[SynthesisService] = None
_service_lock = threading.Lock()


def get_service(settings: Settings) -> SynthesisService:
    """Get or lazily create the process-wide SynthesisService."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = SynthesisService(settings)
    return _service


def reset_service() -> None:
    """Drop the process-wide instance. Used by tests."""
    global _service
    with _service_lock:
        _service = None
