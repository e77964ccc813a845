"""
Configuration Management for naijavoice.

Settings come from three layers (highest priority first):
    1. Environment variables (NAIJAVOICE_PORT, NAIJAVOICE_CONTACT_EMAIL, ...)
    2. YAML config file (config/settings.yaml, or NAIJAVOICE_SETTINGS)
    3. Defaults class values

The raw YAML dictionary is kept in an immutable Settings container.
ServiceConfig.from_settings() turns it into typed, validated dataclasses.

Example settings.yaml:
    voices:
      default: lagos-female

    validation:
      max_text_chars: 500

    contact:
      email: info@naijavoice.com

    logging:
      level: 2  # NORMAL
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml


class ConfigValidationError(ValueError):
    """Raised when a configuration value is out of bounds or of the wrong type."""
    pass


class Defaults:
    """
    Centralized default configuration values.

    Used whenever neither the YAML file nor the environment provide a value.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Voices
    # ─────────────────────────────────────────────────────────────────────────
    DEFAULT_VOICE = "lagos-female"      # Fallback voice for unknown/missing ids

    # ─────────────────────────────────────────────────────────────────────────
    # Request validation
    # ─────────────────────────────────────────────────────────────────────────
    MAX_TEXT_CHARS = 500                # Demo limit on trimmed text length

    # ─────────────────────────────────────────────────────────────────────────
    # Contact channel
    # ─────────────────────────────────────────────────────────────────────────
    CONTACT_EMAIL = "info@naijavoice.com"
    CONTACT_REPLY_MESSAGE = "We will contact you within 24 hours"

    # ─────────────────────────────────────────────────────────────────────────
    # Orders
    # ─────────────────────────────────────────────────────────────────────────
    ORDERS_MAX_TRACKED = 1000           # Oldest orders evicted beyond this
    ORDERS_ESTIMATED_DELIVERY = "2-5 minutes"
    ORDERS_WORDS_PER_MINUTE = 150       # Used for estimated_minutes

    # ─────────────────────────────────────────────────────────────────────────
    # Server
    # ─────────────────────────────────────────────────────────────────────────
    SERVER_HOST = "0.0.0.0"
    SERVER_PORT = 5000
    SERVER_CORS_ORIGINS = ["*"]

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_TEXT_PREVIEW_CHARS = 80
    LOGGING_LEVEL = 2                   # 1=MINIMAL, 2=NORMAL, 3=VERBOSE, 4=DEBUG


@dataclass
class ValidationConfig:
    """Limits applied by the request validator."""
    max_text_chars: int = Defaults.MAX_TEXT_CHARS


@dataclass
class ContactConfig:
    """Where callers are sent for longer content and audio downloads."""
    email: str = Defaults.CONTACT_EMAIL
    reply_message: str = Defaults.CONTACT_REPLY_MESSAGE


@dataclass
class OrdersConfig:
    """In-memory order book settings."""
    max_tracked: int = Defaults.ORDERS_MAX_TRACKED
    estimated_delivery: str = Defaults.ORDERS_ESTIMATED_DELIVERY
    words_per_minute: int = Defaults.ORDERS_WORDS_PER_MINUTE


@dataclass
class ServerConfig:
    """HTTP server binding and CORS."""
    host: str = Defaults.SERVER_HOST
    port: int = Defaults.SERVER_PORT
    cors_origins: List[str] = field(default_factory=lambda: list(Defaults.SERVER_CORS_ORIGINS))


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Log levels:
        1 = MINIMAL: Errors only
        2 = NORMAL: Request lifecycle (default)
        3 = VERBOSE: Per-stage detail
        4 = DEBUG: Internal state
    """
    text_preview_chars: int = Defaults.LOGGING_TEXT_PREVIEW_CHARS
    level: int = Defaults.LOGGING_LEVEL


@dataclass
class ServiceConfig:
    """
    Validated configuration for SynthesisService.

    Usage:
        settings = load_settings("config/settings.yaml")
        config = ServiceConfig.from_settings(settings)
        print(config.validation.max_text_chars)
    """
    default_voice: str = Defaults.DEFAULT_VOICE
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    contact: ContactConfig = field(default_factory=ContactConfig)
    orders: OrdersConfig = field(default_factory=OrdersConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ServiceConfig":
        """
        Build a ServiceConfig from raw Settings, applying defaults and checks.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        raw = settings.raw

        # ─────────────────────────────────────────────────────────────────────
        # Voices
        # ─────────────────────────────────────────────────────────────────────
        voices_raw = raw.get("voices", {}) or {}
        default_voice = str(voices_raw.get("default", Defaults.DEFAULT_VOICE)).strip()
        if not default_voice:
            raise ConfigValidationError("voices.default must not be empty")

        # ─────────────────────────────────────────────────────────────────────
        # Validation limits
        # ─────────────────────────────────────────────────────────────────────
        validation_raw = raw.get("validation", {}) or {}
        validation = ValidationConfig(
            max_text_chars=int(validation_raw.get("max_text_chars", Defaults.MAX_TEXT_CHARS)),
        )
        cls._validate_positive("validation.max_text_chars", validation.max_text_chars)

        # ─────────────────────────────────────────────────────────────────────
        # Contact channel
        # ─────────────────────────────────────────────────────────────────────
        contact_raw = raw.get("contact", {}) or {}
        contact = ContactConfig(
            email=os.getenv("NAIJAVOICE_CONTACT_EMAIL")
                or str(contact_raw.get("email", Defaults.CONTACT_EMAIL)),
            reply_message=str(contact_raw.get("reply_message", Defaults.CONTACT_REPLY_MESSAGE)),
        )
        if "@" not in contact.email:
            raise ConfigValidationError(f"contact.email must be an email address, got {contact.email!r}")

        # ─────────────────────────────────────────────────────────────────────
        # Orders
        # ─────────────────────────────────────────────────────────────────────
        orders_raw = raw.get("orders", {}) or {}
        orders = OrdersConfig(
            max_tracked=int(orders_raw.get("max_tracked", Defaults.ORDERS_MAX_TRACKED)),
            estimated_delivery=str(orders_raw.get("estimated_delivery", Defaults.ORDERS_ESTIMATED_DELIVERY)),
            words_per_minute=int(orders_raw.get("words_per_minute", Defaults.ORDERS_WORDS_PER_MINUTE)),
        )
        cls._validate_positive("orders.max_tracked", orders.max_tracked)
        cls._validate_positive("orders.words_per_minute", orders.words_per_minute)

        # ─────────────────────────────────────────────────────────────────────
        # Server (environment variables take precedence)
        # ─────────────────────────────────────────────────────────────────────
        server_raw = raw.get("server", {}) or {}
        origins = server_raw.get("cors_origins", Defaults.SERVER_CORS_ORIGINS)
        if isinstance(origins, str):
            origins = [o.strip() for o in origins.split(",") if o.strip()]
        server = ServerConfig(
            host=os.getenv("NAIJAVOICE_HOST") or str(server_raw.get("host", Defaults.SERVER_HOST)),
            port=int(os.getenv("NAIJAVOICE_PORT") or server_raw.get("port", Defaults.SERVER_PORT)),
            cors_origins=list(origins),
        )
        cls._validate_range("server.port", server.port, 1, 65535)

        # ─────────────────────────────────────────────────────────────────────
        # Logging
        # ─────────────────────────────────────────────────────────────────────
        logging_raw = raw.get("logging", {}) or {}
        log_level_raw = logging_raw.get("level", Defaults.LOGGING_LEVEL)

        # Accept names as well as numbers
        if isinstance(log_level_raw, str):
            level_map = {
                "MINIMAL": 1, "1": 1,
                "NORMAL": 2, "INFO": 2, "2": 2,
                "VERBOSE": 3, "3": 3,
                "DEBUG": 4, "TRACE": 4, "4": 4,
            }
            log_level = level_map.get(log_level_raw.upper(), Defaults.LOGGING_LEVEL)
        else:
            log_level = int(log_level_raw)

        logging_cfg = LoggingConfig(
            text_preview_chars=int(logging_raw.get("text_preview_chars", Defaults.LOGGING_TEXT_PREVIEW_CHARS)),
            level=log_level,
        )
        cls._validate_non_negative("logging.text_preview_chars", logging_cfg.text_preview_chars)
        cls._validate_range("logging.level", logging_cfg.level, 1, 4)

        return cls(
            default_voice=default_voice,
            validation=validation,
            contact=contact,
            orders=orders,
            server=server,
            logging=logging_cfg,
        )

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_non_negative(name: str, value: int | float) -> None:
        if value < 0:
            raise ConfigValidationError(f"{name} must be non-negative, got {value}")

    @staticmethod
    def _validate_range(name: str, value: int | float, min_val: int | float, max_val: int | float) -> None:
        if not (min_val <= value <= max_val):
            raise ConfigValidationError(f"{name} must be between {min_val} and {max_val}, got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable container for the raw YAML configuration.

    Use get_service_config() for the validated, typed view.
    """
    raw: Dict[str, Any]

    def get_service_config(self) -> ServiceConfig:
        """Validated ServiceConfig for these settings."""
        return ServiceConfig.from_settings(self)


def default_settings_path() -> str:
    """Settings file location, overridable through NAIJAVOICE_SETTINGS."""
    return os.getenv("NAIJAVOICE_SETTINGS", "config/settings.yaml")


def load_settings(path: str | None = None, missing_ok: bool = True) -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        path: YAML file path. Defaults to default_settings_path().
        missing_ok: Return empty Settings (all defaults) when the file
            does not exist instead of raising.

    Raises:
        FileNotFoundError: If the file is missing and missing_ok is False.
        ConfigValidationError: If the YAML root is not a mapping.
    """
    p = Path(path or default_settings_path())
    if not p.exists():
        if missing_ok:
            return Settings(raw={})
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"settings root must be a mapping: {p}")

    return Settings(raw=raw)
