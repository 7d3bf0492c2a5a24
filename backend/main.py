from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_core.tutor_chain import TutorMemory
from backend.config import Settings, get_settings
from backend.middleware import BodyLimitMiddleware
from backend.routers import documents, study, tutor


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("backend")

HEALTH_TEXT = "✅ EDU AI Lab backend is running."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="EDU AI Lab", version="1.0.0")
    app.state.tutor_memory = TutorMemory(
        max_turns=settings.tutor_max_turns,
        ttl_seconds=settings.tutor_ttl_seconds,
        max_sessions=settings.tutor_max_sessions,
    )

    app.add_middleware(
        BodyLimitMiddleware,
        json_limit=settings.max_json_bytes,
        upload_limit=settings.max_upload_bytes,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        body = exc.detail if isinstance(exc.detail, dict) else {"error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.warning(f"⚠️ Invalid request on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "invalid_request", "details": str(exc.errors())})

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return HEALTH_TEXT

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(study.router)
    app.include_router(documents.router)
    app.include_router(tutor.router)

    logger.info(
        "Config: env=%s model=%s key_set=%s upload_dir=%s",
        settings.app_env,
        settings.gemini_model,
        bool(settings.gemini_api_key),
        settings.upload_dir,
    )
    if not settings.gemini_api_key:
        logger.warning("⚠️ GEMINI_API_KEY not set. Set env var GEMINI_API_KEY before running.")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
