"""
API Request/Response Schemas.

Pydantic models for the /api endpoints. Field names follow the wire
format (camelCase) that the web frontend already speaks.

Text length is deliberately NOT constrained here: length and emptiness
are business rules checked by services/validators.py so that violations
come back as 400 with a readable message instead of a 422 schema error.

Example Request (POST /api/synthesize):
    {
        "text": "Hello Lagos",
        "voice": "lagos-female",
        "speed": 1.0
    }
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SynthesizeBody(BaseModel):
    """
    Synthesis request.

    Attributes:
        text: Text to voice. Trimmed; must be 1-500 characters afterwards.
        voice: Voice id from /api/voices. Defaults to the configured
            default voice. Unknown ids are accepted.
        speed: Speed multiplier, passed through to the engine.
    """
    text: Optional[str] = Field(
        default=None,
        description="Text to synthesize (1-500 characters after trimming)",
    )
    voice: Optional[str] = Field(
        default=None,
        description="Voice id (defaults to the configured default voice)",
    )
    speed: Optional[float] = Field(
        default=1.0,
        description="Speed multiplier (not validated)",
    )


class DemoSampleBody(BaseModel):
    """Demo sample request; voice defaults to the configured default voice."""
    voice: Optional[str] = Field(default=None, description="Voice id")


class ContactBody(BaseModel):
    """Contact form submission. Every field is optional."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    order_type: Optional[str] = Field(default=None, alias="orderType")


class VoiceOut(BaseModel):
    id: str
    name: str
    description: str
    available: bool


class VoicesResponse(BaseModel):
    voices: List[VoiceOut]


class DemoSampleResponse(BaseModel):
    success: bool = True
    audioUrl: str
    text: str


class ContactResponse(BaseModel):
    success: bool = True
    message: str


class AnalyticsResponse(BaseModel):
    """
    Usage counters since process start.

    averageLength is totalCharacters / max(totalRequests, 1).
    uniqueUsers is always 0: requests carry no user identity.
    """
    totalRequests: int
    totalCharacters: int
    averageLength: float
    uniqueUsers: int
