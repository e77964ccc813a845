"""
Voice Catalog.

Static, ordered set of the Nigerian voice profiles the service advertises.
Lookups never fail: an unknown identifier resolves to the fallback
profile so callers always have something to display.

Example:
    >>> catalog = VoiceCatalog.default()
    >>> [v.id for v in catalog.list_voices()]
    ['lagos-female', 'lagos-male', 'pidgin', 'yoruba-accent']
    >>> catalog.get_voice("unknown-voice").id
    'lagos-female'
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional

from naijavoice.core.config import Defaults


@dataclass(frozen=True)
class VoiceProfile:
    """
    Display metadata for one voice.

    Attributes:
        id: Unique voice identifier used in requests (e.g. "pidgin").
        name: Human-readable name.
        description: One-line description for the voice picker.
        available: Whether the voice can currently be ordered.
    """
    id: str
    name: str
    description: str
    available: bool = True

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


DEFAULT_VOICES = (
    VoiceProfile("lagos-female", "Lagos Female", "Professional Lagos female voice"),
    VoiceProfile("lagos-male", "Lagos Male", "Business-focused Lagos male voice"),
    VoiceProfile("pidgin", "Nigerian Pidgin", "Friendly Nigerian Pidgin accent"),
    VoiceProfile("yoruba-accent", "Yoruba Accent", "Warm Yoruba-influenced English"),
)

# Sample sentence played for each voice on the landing page
DEMO_TEXTS = {
    "lagos-female": "Welcome to Lagos! We provide excellent business services.",
    "lagos-male": "Good morning, this is your professional voice assistant.",
    "pidgin": "How you dey? Make we do business together small small.",
    "yoruba-accent": "E ku aaro o! Today go dey very fine for business.",
}


class VoiceCatalog:
    """
    Immutable lookup over voice profiles, preserving declaration order.

    Args:
        voices: Profiles in the order they should be listed.
        fallback_id: Identifier returned for unknown lookups. Must be one
            of the given profiles.

    Raises:
        ValueError: On duplicate identifiers or an unknown fallback_id.
    """

    def __init__(self, voices: Iterable[VoiceProfile], fallback_id: str = Defaults.DEFAULT_VOICE):
        self._voices: Dict[str, VoiceProfile] = {}
        for profile in voices:
            if profile.id in self._voices:
                raise ValueError(f"duplicate voice id: {profile.id}")
            self._voices[profile.id] = profile

        if fallback_id not in self._voices:
            raise ValueError(f"fallback voice {fallback_id!r} is not in the catalog")
        self._fallback_id = fallback_id

    @classmethod
    def default(cls, fallback_id: str = Defaults.DEFAULT_VOICE) -> "VoiceCatalog":
        """Catalog of the built-in voices."""
        return cls(DEFAULT_VOICES, fallback_id=fallback_id)

    @property
    def fallback(self) -> VoiceProfile:
        return self._voices[self._fallback_id]

    def __len__(self) -> int:
        return len(self._voices)

    def __contains__(self, voice_id: object) -> bool:
        return voice_id in self._voices

    def list_voices(self) -> List[VoiceProfile]:
        """All profiles in declaration order."""
        return list(self._voices.values())

    def find(self, voice_id: Optional[str]) -> Optional[VoiceProfile]:
        """Exact lookup; None when the identifier is unknown."""
        if voice_id is None:
            return None
        return self._voices.get(voice_id)

    def get_voice(self, voice_id: Optional[str]) -> VoiceProfile:
        """Profile for voice_id, or the fallback profile if it is unknown."""
        return self.find(voice_id) or self.fallback

    def demo_text(self, voice_id: Optional[str]) -> str:
        """Demo sentence for the voice; the fallback voice's sentence otherwise."""
        if voice_id in DEMO_TEXTS:
            return DEMO_TEXTS[voice_id]
        return DEMO_TEXTS.get(self._fallback_id, DEMO_TEXTS[Defaults.DEFAULT_VOICE])
