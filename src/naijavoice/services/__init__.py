"""
naijavoice Services Layer.

Business logic between the API and the engine seam:
    - synthesis_service.py: SynthesisService (request pipeline, singleton)
    - validators.py: Text validation and validated request type
    - usage.py: UsageAggregator (analytics counters)
    - orders.py: OrderBook (in-memory order records)
"""
from .synthesis_service import (
    ErrorCode,
    OrderNotFoundError,
    ServiceError,
    SynthesisResponse,
    SynthesisService,
    get_service,
    reset_service,
)
from .usage import UsageAggregator, UsageSnapshot
from .validators import (
    EmptyInputError,
    InvalidTextError,
    SynthesisRequest,
    TextTooLongError,
    ValidationError,
)

__all__ = [
    "SynthesisService",
    "SynthesisResponse",
    "SynthesisRequest",
    "UsageAggregator",
    "UsageSnapshot",
    "ServiceError",
    "OrderNotFoundError",
    "ValidationError",
    "EmptyInputError",
    "InvalidTextError",
    "TextTooLongError",
    "ErrorCode",
    "get_service",
    "reset_service",
]
