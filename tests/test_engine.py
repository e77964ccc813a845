"""Tests for the synthesis engine seam and the placeholder engine."""
import base64

import pytest

from naijavoice.tts.engine import (
    BaseSynthesisEngine,
    PlaceholderEngine,
    decode_placeholder,
    encode_placeholder,
    get_engine,
    placeholder_sentence,
)


class TestPlaceholderPayload:

    def test_sentence_format(self):
        assert placeholder_sentence("Hello Lagos", "lagos-female") == \
            'Nigerian TTS Audio: "Hello Lagos" in lagos-female style'

    def test_data_url_prefix(self):
        assert encode_placeholder("Hi", "pidgin").startswith("data:audio/wav;base64,")

    def test_payload_is_base64_of_sentence(self):
        url = encode_placeholder("Hello Lagos", "lagos-female")
        payload = url.split(",", 1)[1]
        assert base64.b64decode(payload).decode("utf-8") == \
            'Nigerian TTS Audio: "Hello Lagos" in lagos-female style'

    def test_decode_non_ascii(self):
        url = encode_placeholder("Ẹ káàárọ̀", "yoruba-accent")
        assert decode_placeholder(url) == 'Nigerian TTS Audio: "Ẹ káàárọ̀" in yoruba-accent style'

    def test_decode_rejects_other_urls(self):
        with pytest.raises(ValueError):
            decode_placeholder("https://example.com/audio.wav")

    def test_decode_rejects_bad_base64(self):
        with pytest.raises(ValueError):
            decode_placeholder("data:audio/wav;base64,!!!not-base64!!!")


class TestPlaceholderEngine:

    def test_synthesize(self):
        result = PlaceholderEngine().synthesize("Hello Lagos", "pidgin", speed=1.5)
        assert result.placeholder is True
        assert decode_placeholder(result.audio_url) == 'Nigerian TTS Audio: "Hello Lagos" in pidgin style'

    def test_unknown_voice_encoded_as_given(self):
        result = PlaceholderEngine().synthesize("Hi", "unknown-voice")
        assert "unknown-voice" in decode_placeholder(result.audio_url)


class TestEngineFactory:

    def test_default_engine(self):
        engine = get_engine()
        assert isinstance(engine, PlaceholderEngine)
        assert engine.name == "placeholder"

    def test_name_is_case_insensitive(self):
        assert isinstance(get_engine(" Placeholder "), PlaceholderEngine)

    def test_unknown_engine(self):
        with pytest.raises(ValueError, match="Unknown synthesis engine"):
            get_engine("xtts")

    def test_base_engine_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BaseSynthesisEngine().synthesize("Hi", "pidgin")
