"""
Input Validation for Synthesis Requests.

Validation runs before anything is counted or recorded, so a rejected
request leaves no trace in the usage counters or the order book.

Validation Rules:
    - Text: required; surrounding whitespace is trimmed; the trimmed
      text must be 1..max_length characters (500 by default)
    - Voice: only checked to be encodable. Missing -> default voice.
      Unknown ids are accepted as given; display falls back to the
      catalog's default.
    - Speed: not validated, passed through (default 1.0)

Error Codes:
    EMPTY_INPUT     text missing or only whitespace
    TEXT_TOO_LONG   trimmed text over the limit; the message names the
                    limit and the contact address for longer content
    INVALID_TEXT    text or voice holds characters with no UTF-8 encoding
                    (lone surrogates, which JSON can carry as \\ud800)

Usage:
    from naijavoice.services.validators import validate_request, ValidationError

    try:
        req = validate_request(body.text, body.voice, body.speed)
    except ValidationError as e:
        return JSONResponse(status_code=400, content=e.to_dict())
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from naijavoice.core.config import Defaults


class ValidationError(Exception):
    """
    Raised when a synthesis request fails validation.

    Attributes:
        message: Human-readable description, safe to show to callers.
        code: Machine-readable code (EMPTY_INPUT, TEXT_TOO_LONG, ...).
    """

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.message, "code": self.code}


class EmptyInputError(ValidationError):
    """Text is missing or blank after trimming."""

    def __init__(self, message: str = "No text provided"):
        super().__init__(message, "EMPTY_INPUT")


class TextTooLongError(ValidationError):
    """Trimmed text exceeds the demo limit."""

    def __init__(self, length: int, max_length: int, contact_email: str):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Demo limited to {max_length} characters. "
            f"Contact {contact_email} for longer content.",
            "TEXT_TOO_LONG",
        )


class InvalidTextError(ValidationError):
    """Text or voice contains characters that cannot be encoded as UTF-8 (lone surrogates)."""

    def __init__(self, field: str = "text"):
        self.field = field
        super().__init__(f"Invalid characters in {field}", "INVALID_TEXT")


def _check_encodable(value: str, field: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidTextError(field) from e


@dataclass(frozen=True)
class SynthesisRequest:
    """
    A request that passed validation.

    Attributes:
        text: Trimmed input text (1..max_length characters).
        voice: Requested voice id, or the default voice if none was given.
        speed: Speed multiplier, passed through unchanged.
    """
    text: str
    voice: str
    speed: float = 1.0


def validate_text(
    text: Optional[str],
    max_length: int = Defaults.MAX_TEXT_CHARS,
    contact_email: str = Defaults.CONTACT_EMAIL,
) -> str:
    """
    Trim and check input text.

    Returns:
        The trimmed text.

    Raises:
        EmptyInputError: If text is None or blank.
        TextTooLongError: If the trimmed text is longer than max_length.
        InvalidTextError: If the text cannot be encoded as UTF-8.
    """
    if not text or not text.strip():
        raise EmptyInputError()

    text = text.strip()
    _check_encodable(text, "text")

    if len(text) > max_length:
        raise TextTooLongError(len(text), max_length, contact_email)

    return text


def validate_voice(voice: Optional[str], default_voice: str = Defaults.DEFAULT_VOICE) -> str:
    """
    Resolve the voice id: blank or missing becomes default_voice.

    Raises:
        InvalidTextError: If the id cannot be encoded as UTF-8.
    """
    voice_id = (voice or "").strip() or default_voice
    _check_encodable(voice_id, "voice")
    return voice_id


def validate_request(
    text: Optional[str],
    voice: Optional[str] = None,
    speed: Optional[float] = None,
    max_length: int = Defaults.MAX_TEXT_CHARS,
    contact_email: str = Defaults.CONTACT_EMAIL,
    default_voice: str = Defaults.DEFAULT_VOICE,
) -> SynthesisRequest:
    """
    Validate a synthesis request.

    Text is checked fully, voice only for encodability. Pure function:
    no counters, no logging.

    Raises:
        EmptyInputError, TextTooLongError, InvalidTextError
    """
    clean = validate_text(text, max_length=max_length, contact_email=contact_email)
    return SynthesisRequest(
        text=clean,
        voice=validate_voice(voice, default_voice),
        speed=1.0 if speed is None else float(speed),
    )
