# medocr/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medocr import __version__
from medocr.core.config import CONFIG, Settings
from medocr.core.limits import BodySizeLimitMiddleware
from medocr.core.logger import get_logger
from medocr.models.schemas import HealthResponse
from medocr.routes.cloud_ocr import router as cloud_ocr_router
from medocr.routes.root import router as root_router
from medocr.routes.summarize import router as summarize_router

log = get_logger("main")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or CONFIG

    app = FastAPI(
        title="Medical OCR – Medication Explainer Relay",
        version=__version__,
    )

    # Added first so it runs inside CORS and its 413 still carries CORS headers
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)

    # Only the dev frontend origin is allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": str(exc.errors())},
        )

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"ok": True}

    app.include_router(root_router)
    app.include_router(summarize_router)

    # Variant build: server-side OCR via Cloud Vision
    if settings.ENABLE_CLOUD_VISION:
        app.include_router(cloud_ocr_router)

    log.info(
        f"Relay ready (model={settings.GEMINI_MODEL}, cors={settings.CORS_ORIGIN}, "
        f"cloud_vision={'on' if settings.ENABLE_CLOUD_VISION else 'off'})"
    )
    return app


app = create_app()
