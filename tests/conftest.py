import pytest
from fastapi.testclient import TestClient

from medocr.core.config import Settings
from medocr.main import create_app
from medocr.services.gemini import get_summarizer
from medocr.services.google_vision import get_cloud_ocr


class StubSummarizer:
    def __init__(self, text="X", exc=None):
        self.text = text
        self.exc = exc
        self.prompts = []

    async def summarize(self, prompt):
        self.prompts.append(prompt)
        if self.exc:
            raise self.exc
        return self.text


class StubCloudOcr:
    def __init__(self, text="Amoxicillin 500mg", exc=None):
        self.text = text
        self.exc = exc
        self.seen = []

    def detect_text(self, image_bytes):
        self.seen.append(image_bytes)
        if self.exc:
            raise self.exc
        return self.text


@pytest.fixture
def make_client():
    def _make(summarizer=None, cloud_ocr=None, **overrides):
        settings = Settings(**overrides)
        app = create_app(settings)
        if summarizer is not None:
            app.dependency_overrides[get_summarizer] = lambda: summarizer
        if cloud_ocr is not None:
            app.dependency_overrides[get_cloud_ocr] = lambda: cloud_ocr
        return TestClient(app)

    return _make
