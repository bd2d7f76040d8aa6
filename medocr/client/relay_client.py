# medocr/client/relay_client.py
import base64

import requests

from medocr.core.config import CONFIG
from medocr.core.logger import get_logger

log = get_logger("relay_client")


class RelayError(Exception):
    """Non-success answer from the relay; message is meant for the user."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _json_or_empty(resp: requests.Response) -> dict:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class RelayClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None, session=None):
        self.base_url = (base_url or CONFIG.RELAY_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else CONFIG.RELAY_TIMEOUT
        self.http = session or requests.Session()

    def _post(self, path: str, payload: dict, fallback_error: str) -> dict:
        resp = self.http.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        data = _json_or_empty(resp)
        if not resp.ok:
            raise RelayError(
                data.get("error") or data.get("details") or fallback_error,
                status_code=resp.status_code,
            )
        return data

    def health(self) -> bool:
        resp = self.http.get(f"{self.base_url}/health", timeout=self.timeout)
        return resp.ok and bool(_json_or_empty(resp).get("ok"))

    def summarize(self, ocr_text: str) -> str:
        data = self._post("/api/summarize-med", {"ocrText": ocr_text}, "Summarize failed")
        return data.get("text") or ""

    def cloud_ocr(self, image_bytes: bytes, mime: str = "image/png") -> str:
        b64 = f"data:{mime};base64," + base64.b64encode(image_bytes).decode()
        data = self._post("/api/ocr/cloud-vision", {"image": b64}, "Cloud OCR failed")
        return data.get("text") or ""
