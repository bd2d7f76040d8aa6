# medocr/client/ocr_engine.py
import io

import pytesseract
from PIL import Image

from medocr.client.progress import ProgressChannel
from medocr.client.workflow import ImageRef
from medocr.core.config import CONFIG
from medocr.core.logger import get_logger

log = get_logger("ocr_engine")


def load_image(image: ImageRef) -> Image.Image:
    if image.data is not None:
        pil = Image.open(io.BytesIO(image.data))
    elif image.path:
        pil = Image.open(image.path)
    else:
        raise ValueError(f"Image {image.name!r} has neither bytes nor a path")
    return pil.convert("RGB")


class TesseractEngine:
    """
    Local OCR with pytesseract. Tesseract itself reports no progress,
    so the run is split into stages and each stage end is published.
    """

    def __init__(self, lang: str | None = None, config: str = "--psm 3"):
        self.lang = lang or CONFIG.TESSERACT_LANG
        self.config = config

    def recognize(self, image: ImageRef, channel: ProgressChannel) -> str:
        try:
            channel.publish(0.0)
            pil = load_image(image)
            channel.publish(0.25)
            channel.raise_if_cancelled()

            text = pytesseract.image_to_string(pil, lang=self.lang, config=self.config)
            channel.publish(1.0)
            log.info(f"Tesseract read {len(text)} chars from {image.name}")
            return text
        finally:
            channel.close()


class CloudVisionEngine:
    """Server-side OCR: ships the image to the relay's Cloud Vision endpoint."""

    def __init__(self, relay):
        self.relay = relay

    def recognize(self, image: ImageRef, channel: ProgressChannel) -> str:
        try:
            channel.publish(0.0)
            data = image.data
            if data is None:
                with open(image.path, "rb") as f:
                    data = f.read()
            channel.publish(0.25)
            channel.raise_if_cancelled()

            text = self.relay.cloud_ocr(data, mime=guess_mime(image.name))
            channel.publish(1.0)
            return text
        finally:
            channel.close()


def guess_mime(name: str) -> str:
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext in ("jpg", "jpeg"):
        return "image/jpeg"
    elif ext in ("tif", "tiff"):
        return "image/tiff"
    elif ext in ("png", "gif", "bmp", "webp"):
        return f"image/{ext}"
    return "application/octet-stream"
