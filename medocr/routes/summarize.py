# medocr/routes/summarize.py
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from medocr.core.logger import get_logger
from medocr.models.schemas import ErrorResponse, SummarizeRequest, SummarizeResponse
from medocr.services.gemini import GeminiSummarizer, get_summarizer
from medocr.services.prompts import build_medication_prompt

log = get_logger("summarize")

router = APIRouter(prefix="/api", tags=["Summarize"])


@router.post(
    "/summarize-med",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize_med(
    req: Optional[SummarizeRequest] = None,
    summarizer: GeminiSummarizer = Depends(get_summarizer),
):
    """Explain OCR'd prescription text in plain language via Gemini."""
    ocr_text = ((req.ocrText if req else None) or "").strip()
    if not ocr_text:
        return JSONResponse(status_code=400, content={"error": "Missing ocrText"})

    prompt = build_medication_prompt(ocr_text)

    try:
        text = await summarizer.summarize(prompt)
    except Exception as e:
        log.exception("Gemini error")
        return JSONResponse(
            status_code=500,
            content={"error": "Gemini call failed", "details": str(e) or repr(e)},
        )

    return SummarizeResponse(text=text or "")
