# medocr/services/google_vision.py
import base64
import re
from typing import Any

from google.cloud import vision
from google.oauth2 import service_account

from medocr.core.config import CONFIG
from medocr.core.logger import get_logger
from medocr.ocr.text_cleaner import NO_TEXT_PLACEHOLDER

log = get_logger("google_vision")

_DATA_URL_RX = re.compile(r"^data:[^,]*;base64,", re.I)


def decode_base64_image(image_b64: str) -> bytes:
    """
    Accepts base64 string (with or without a data-URL prefix) and
    returns the raw image bytes.
    """
    b64_data = _DATA_URL_RX.sub("", image_b64.strip(), count=1)
    return base64.b64decode(b64_data)


def first_annotation_text(response: Any) -> str:
    """
    The first text annotation holds the whole detected text block.
    """
    annotations = list(getattr(response, "text_annotations", None) or [])
    if not annotations:
        return NO_TEXT_PLACEHOLDER
    text = (annotations[0].description or "").strip()
    return text or NO_TEXT_PLACEHOLDER


def get_vision_client(key_path: str | None = None):
    # Ambient credentials (GOOGLE_APPLICATION_CREDENTIALS / gcloud) unless a key file is configured
    if key_path:
        credentials = service_account.Credentials.from_service_account_file(key_path)
        return vision.ImageAnnotatorClient(credentials=credentials)
    return vision.ImageAnnotatorClient()


class CloudVisionOcr:
    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_vision_client(CONFIG.GOOGLE_SERVICE_ACCOUNT_FILE)
        return self._client

    def text_detection(self, image_bytes: bytes):
        """
        Runs TEXT_DETECTION on raw bytes and returns the response object.
        """
        image = vision.Image(content=image_bytes)
        response = self.client.text_detection(image=image)

        if response.error.message:
            raise RuntimeError(response.error.message)

        return response

    def detect_text(self, image_bytes: bytes) -> str:
        response = self.text_detection(image_bytes)
        text = first_annotation_text(response)
        log.info(f"Cloud Vision detected {len(text)} chars")
        return text


_cloud_ocr: CloudVisionOcr | None = None


def get_cloud_ocr() -> CloudVisionOcr:
    global _cloud_ocr
    if _cloud_ocr is None:
        _cloud_ocr = CloudVisionOcr()
    return _cloud_ocr
