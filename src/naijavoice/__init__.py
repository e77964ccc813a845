"""
naijavoice: Nigerian-accent Text-to-Speech demo API.

A small FastAPI backend in front of a speech pipeline that does not exist
yet. It validates text, counts usage, records orders in memory and
returns a placeholder "audio" payload that embeds the input text, plus a
fixed catalog of Nigerian voices.

Endpoints (all under /api):
    - GET  /voices       voice catalog
    - POST /synthesize   validate, count, queue, return placeholder audio
    - GET  /analytics    usage counters
    - GET  /health, POST /demo-sample, GET /order/{id},
      GET /download/{id}, POST /contact

Example Usage:
    >>> from naijavoice.core.config import Settings
    >>> from naijavoice.services import SynthesisService
    >>>
    >>> service = SynthesisService(Settings(raw={}))
    >>> resp = service.synthesize("Hello Lagos", voice="lagos-female")
    >>> resp.status
    'queued'
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
