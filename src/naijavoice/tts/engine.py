"""
Synthesis Engine Seam.

This module provides:
    - BaseSynthesisEngine: The contract a real speech engine must fulfil
    - SynthResult: Result container returned by engines
    - PlaceholderEngine: Development stub that produces no audio
    - get_engine(): Factory used by the service

There is no speech synthesis yet. PlaceholderEngine returns a
`data:audio/wav;base64,...` URL whose payload is the UTF-8 sentence

    Nigerian TTS Audio: "<text>" in <voice> style

It is NOT playable audio. It exists so clients and tests can see that the
text and voice made it through the pipeline. A real engine plugs in by
subclassing BaseSynthesisEngine and registering it in get_engine(); the
request/response contract of the API does not change.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass

from naijavoice.core.logging import debug, get_logger

PLACEHOLDER_MEDIA_TYPE = "audio/wav"
_DATA_URL_PREFIX = f"data:{PLACEHOLDER_MEDIA_TYPE};base64,"


@dataclass
class SynthResult:
    """
    Result of a synthesis call.

    Attributes:
        audio_url: Where the client fetches the audio. For the placeholder
            engine this is an inline data URL.
        placeholder: True when audio_url does not hold real audio.
    """
    audio_url: str
    placeholder: bool = False


class BaseSynthesisEngine:
    """
    Base class for synthesis engines.

    Subclasses implement synthesize(). Engines receive text that has
    already been validated and trimmed.
    """
    name: str = "base"

    def synthesize(self, text: str, voice: str, speed: float = 1.0) -> SynthResult:
        raise NotImplementedError


def placeholder_sentence(text: str, voice: str) -> str:
    """The sentence the placeholder engine encodes."""
    return f'Nigerian TTS Audio: "{text}" in {voice} style'


def encode_placeholder(text: str, voice: str) -> str:
    """Build the placeholder data URL for text and voice."""
    payload = base64.b64encode(placeholder_sentence(text, voice).encode("utf-8")).decode("ascii")
    return f"{_DATA_URL_PREFIX}{payload}"


def decode_placeholder(audio_url: str) -> str:
    """
    Recover the sentence embedded in a placeholder data URL.

    Raises:
        ValueError: If audio_url is not a placeholder data URL.
    """
    if not audio_url.startswith(_DATA_URL_PREFIX):
        raise ValueError("not a placeholder audio URL")
    try:
        raw = base64.b64decode(audio_url[len(_DATA_URL_PREFIX):], validate=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"invalid placeholder payload: {e}") from e
    return raw.decode("utf-8")


class PlaceholderEngine(BaseSynthesisEngine):
    """Development stub. Encodes the request into a fake audio URL."""
    name = "placeholder"

    def __init__(self):
        self.logger = get_logger(f"naijavoice.engine.{self.name}")

    def synthesize(self, text: str, voice: str, speed: float = 1.0) -> SynthResult:
        url = encode_placeholder(text, voice)
        debug(self.logger, "placeholder_synth", chars=len(text), voice=voice, speed=speed)
        return SynthResult(
            audio_url=url,
            placeholder=True,
        )


def get_engine(name: str = "placeholder") -> BaseSynthesisEngine:
    """
    Create the synthesis engine named `name`.

    Raises:
        ValueError: For an unknown engine name.
    """
    engine_type = (name or "placeholder").strip().lower()
    if engine_type == "placeholder":
        return PlaceholderEngine()
    raise ValueError(f"Unknown synthesis engine: {name}")
