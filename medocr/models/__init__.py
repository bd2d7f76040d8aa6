# medocr/models/__init__.py

from .schemas import (
    CloudOcrRequest,
    CloudOcrResponse,
    ErrorResponse,
    HealthResponse,
    SummarizeRequest,
    SummarizeResponse,
)

__all__ = [
    "CloudOcrRequest",
    "CloudOcrResponse",
    "ErrorResponse",
    "HealthResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]
