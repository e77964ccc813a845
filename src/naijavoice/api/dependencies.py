"""
FastAPI Dependency Providers.

    get_settings()            settings loaded once from config/settings.yaml
    get_synthesis_service()   the process-wide SynthesisService

Handlers receive the service through Depends(), so the usage counters and
order book are shared by reference rather than reached as module globals.
Tests swap in their own instance with app.dependency_overrides.
"""
from __future__ import annotations

from functools import lru_cache

from naijavoice.core.config import Settings, load_settings
from naijavoice.services.synthesis_service import SynthesisService, get_service


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache application settings.

    The path comes from NAIJAVOICE_SETTINGS (default config/settings.yaml).
    A missing file means all defaults.
    """
    return load_settings()


def get_synthesis_service() -> SynthesisService:
    """The singleton SynthesisService, created on first use."""
    return get_service(get_settings())
