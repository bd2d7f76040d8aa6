# medocr/services/gemini.py
from typing import Any

import google.generativeai as genai

from medocr.core.config import CONFIG
from medocr.core.logger import get_logger

log = get_logger("gemini")


def extract_response_text(response: Any) -> str:
    """
    Pull plain text out of a generate_content response.

    Primary: `response.text`. It raises ValueError when the candidate has
    no text parts (blocked / empty), so fall back to joining the parts of
    the first candidate by hand. Anything else yields "".
    """
    if response is None:
        return ""

    try:
        text = response.text
    except (ValueError, AttributeError):
        text = None
    if text:
        return text

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", "") or "" for p in parts)


class GeminiSummarizer:
    def __init__(self, model_name: str | None = None, api_key: str | None = None):
        self.model_name = model_name or CONFIG.GEMINI_MODEL
        self.api_key = api_key if api_key is not None else CONFIG.GEMINI_API_KEY
        self._model = None

    def _get_model(self) -> genai.GenerativeModel:
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
            log.info(f"Gemini model ready: {self.model_name}")
        return self._model

    async def summarize(self, prompt: str) -> str:
        model = self._get_model()
        response = await model.generate_content_async(
            [{"role": "user", "parts": [{"text": prompt}]}]
        )
        return extract_response_text(response)


_summarizer: GeminiSummarizer | None = None


def get_summarizer() -> GeminiSummarizer:
    global _summarizer
    if _summarizer is None:
        _summarizer = GeminiSummarizer()
    return _summarizer
