# medocr/routes/cloud_ocr.py
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from medocr.core.logger import get_logger
from medocr.models.schemas import CloudOcrRequest, CloudOcrResponse, ErrorResponse
from medocr.services.google_vision import CloudVisionOcr, decode_base64_image, get_cloud_ocr

log = get_logger("cloud_ocr")

router = APIRouter(prefix="/api/ocr", tags=["OCR"])


@router.post(
    "/cloud-vision",
    response_model=CloudOcrResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def ocr_cloud_vision(
    req: Optional[CloudOcrRequest] = None,
    ocr: CloudVisionOcr = Depends(get_cloud_ocr),
):
    """
    Thin wrapper around Cloud Vision TEXT_DETECTION.
    Sync route: the Vision client blocks, FastAPI runs it in the threadpool.
    """
    image_b64 = (req.image if req else None) or ""
    if not image_b64.strip():
        return JSONResponse(status_code=400, content={"error": "Missing image (base64)"})

    try:
        image_bytes = decode_base64_image(image_b64)
        text = ocr.detect_text(image_bytes)
    except Exception as e:
        log.exception("Cloud Vision error")
        return JSONResponse(
            status_code=500,
            content={"error": "Cloud Vision OCR failed", "details": str(e) or repr(e)},
        )

    return CloudOcrResponse(text=text)
