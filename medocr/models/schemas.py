# medocr/models/schemas.py
from typing import Optional
from pydantic import BaseModel


class SummarizeRequest(BaseModel):
    ocrText: Optional[str] = None


class SummarizeResponse(BaseModel):
    text: str


class CloudOcrRequest(BaseModel):
    """`image` is base64, optionally prefixed with a data-URL header."""
    image: Optional[str] = None


class CloudOcrResponse(BaseModel):
    text: str


class HealthResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
