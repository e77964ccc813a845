"""
Tests for input validation functions.

Tests cover:
- validate_text() - empty, whitespace, trimming, max length, unicode
- validate_request() - voice defaulting, unknown voices, speed pass-through
- validate_voice() - defaulting and encodability
- Error codes and messages (EMPTY_INPUT, TEXT_TOO_LONG, INVALID_TEXT)
"""
import pytest

from naijavoice.services.validators import (
    EmptyInputError,
    InvalidTextError,
    SynthesisRequest,
    TextTooLongError,
    ValidationError,
    validate_request,
    validate_text,
    validate_voice,
)


class TestValidateText:
    """Tests for validate_text() function."""

    def test_valid_text(self):
        assert validate_text("Hello Lagos") == "Hello Lagos"

    def test_trims_whitespace(self):
        assert validate_text("  Hello Lagos \n") == "Hello Lagos"

    def test_valid_unicode_text(self):
        text = "Ẹ káàárọ̀, how body?"
        assert validate_text(text) == text

    def test_empty_text_raises_error(self):
        with pytest.raises(EmptyInputError) as exc_info:
            validate_text("")
        assert exc_info.value.code == "EMPTY_INPUT"
        assert exc_info.value.message == "No text provided"

    def test_none_text_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text(None)
        assert exc_info.value.code == "EMPTY_INPUT"

    def test_whitespace_only_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_text("   \t\n  ")
        assert exc_info.value.code == "EMPTY_INPUT"

    def test_text_at_max_length(self):
        text = "a" * 500
        assert validate_text(text) == text

    def test_text_exceeds_max_length(self):
        with pytest.raises(TextTooLongError) as exc_info:
            validate_text("a" * 501)
        err = exc_info.value
        assert err.code == "TEXT_TOO_LONG"
        assert "500" in err.message
        assert "info@naijavoice.com" in err.message
        assert err.length == 501
        assert err.max_length == 500

    def test_lone_surrogate_rejected(self):
        with pytest.raises(InvalidTextError) as exc_info:
            validate_text("Hi \ud800")
        assert exc_info.value.code == "INVALID_TEXT"
        assert exc_info.value.message == "Invalid characters in text"

    def test_length_checked_after_trim(self):
        """Surrounding whitespace does not count toward the limit."""
        text = "  " + "a" * 500 + "  "
        assert validate_text(text) == "a" * 500

    def test_custom_limit_and_email(self):
        with pytest.raises(TextTooLongError) as exc_info:
            validate_text("abcdef", max_length=5, contact_email="sales@example.com")
        assert "5 characters" in exc_info.value.message
        assert "sales@example.com" in exc_info.value.message


class TestValidateRequest:
    """Tests for validate_request() function."""

    def test_returns_synthesis_request(self):
        req = validate_request(" Hello Lagos ", "pidgin", 1.25)
        assert req == SynthesisRequest(text="Hello Lagos", voice="pidgin", speed=1.25)

    def test_missing_voice_uses_default(self):
        assert validate_request("Hi").voice == "lagos-female"
        assert validate_request("Hi", voice="  ").voice == "lagos-female"

    def test_custom_default_voice(self):
        assert validate_request("Hi", default_voice="pidgin").voice == "pidgin"

    def test_unknown_voice_kept(self):
        """Unknown voices are accepted as given."""
        assert validate_request("Hi", voice="unknown-voice").voice == "unknown-voice"

    def test_speed_defaults_to_one(self):
        assert validate_request("Hi").speed == 1.0

    def test_speed_not_validated(self):
        assert validate_request("Hi", speed=-3).speed == -3.0

    def test_invalid_text_propagates(self):
        with pytest.raises(EmptyInputError):
            validate_request("", "pidgin")

    def test_unencodable_voice(self):
        with pytest.raises(InvalidTextError) as exc_info:
            validate_request("Hi", "\ud800")
        assert exc_info.value.to_dict() == {
            "ok": False, "error": "Invalid characters in voice", "code": "INVALID_TEXT",
        }


class TestValidateVoice:

    def test_blank_uses_default(self):
        assert validate_voice(None) == "lagos-female"
        assert validate_voice("  ", "pidgin") == "pidgin"

    def test_trims(self):
        assert validate_voice(" pidgin ") == "pidgin"


class TestValidationErrorDict:

    def test_to_dict_shape(self):
        err = EmptyInputError()
        assert err.to_dict() == {"ok": False, "error": "No text provided", "code": "EMPTY_INPUT"}

    def test_subclasses(self):
        assert issubclass(EmptyInputError, ValidationError)
        assert issubclass(TextTooLongError, ValidationError)
        assert issubclass(InvalidTextError, ValidationError)
