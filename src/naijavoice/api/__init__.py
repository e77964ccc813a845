"""
FastAPI REST API Layer for naijavoice.

    - routes.py: /api/* endpoints and /metrics
    - schemas.py: Request/response Pydantic models
    - dependencies.py: Settings and service providers for Depends()
"""
