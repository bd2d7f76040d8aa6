# medocr/core/config.py

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Secret; read as plain GEMINI_API_KEY (no prefix), usually from .env
    GEMINI_API_KEY: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    GEMINI_MODEL: str = "gemini-3-flash-preview"

    HOST: str = "0.0.0.0"
    PORT: int = 5055

    # Only the dev frontend may call the relay
    CORS_ORIGIN: str = "http://localhost:5173"

    # JSON body limit (2 MB)
    MAX_BODY_BYTES: int = 2 * 1024 * 1024

    # Variant build: server-side OCR through Google Cloud Vision
    ENABLE_CLOUD_VISION: bool = False
    GOOGLE_SERVICE_ACCOUNT_FILE: str | None = None

    # Client side
    RELAY_URL: str = "http://localhost:5055"
    TESSERACT_LANG: str = "eng"
    RELAY_TIMEOUT: float = 120.0

    class Config:
        env_prefix = "MEDOCR_"
        case_sensitive = False


CONFIG = Settings()


def get_settings() -> Settings:
    return CONFIG
