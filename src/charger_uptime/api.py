"""FastAPI backend computing station uptime from posted reports."""
from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .analyze import analyze
from .errors import UptimeError
from .logging_utils import setup_logging
from .render import ERROR_LINE, render_json, render_text

logger = logging.getLogger(__name__)

DEFAULT_MAX_REPORT_BYTES = 1024 * 1024


@dataclass
class Settings:
    """Runtime configuration for the backend service."""

    cors_origins: list[str]
    debug: bool
    max_report_bytes: int


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def load_settings() -> Settings:
    """Load backend configuration from environment variables."""

    cors_env = os.getenv("CHARGER_UPTIME_CORS_ORIGINS", "*")
    cors_origins = [origin.strip() for origin in cors_env.split(",") if origin.strip()]
    debug = _parse_bool(os.getenv("CHARGER_UPTIME_DEBUG"), False)
    max_report_bytes = int(
        os.getenv("CHARGER_UPTIME_MAX_REPORT_BYTES", str(DEFAULT_MAX_REPORT_BYTES))
    )
    return Settings(
        cors_origins=cors_origins or ["*"],
        debug=debug,
        max_report_bytes=max_report_bytes,
    )


_INITIAL_SETTINGS = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    setup_logging(settings.debug)
    logger.debug("Loaded settings: %s", settings)
    app.state.settings = settings
    if settings.cors_origins != _INITIAL_SETTINGS.cors_origins:
        logger.warning(
            "CORS origin configuration changed to %s after startup; restart required for changes to apply.",
            settings.cors_origins,
        )
    yield


app = FastAPI(title="Charger Uptime API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_INITIAL_SETTINGS.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)


def _require_settings() -> Settings:
    settings = getattr(app.state, "settings", None)
    if settings is None:  # pragma: no cover - startup should populate
        raise HTTPException(status_code=503, detail="Service not initialised")
    return settings


@app.get("/healthz")
async def healthz() -> Dict[str, Any]:
    _require_settings()
    return {"status": "ok"}


@app.post("/api/uptime")
async def uptime(request: Request, fmt: str = Query("json", alias="format")) -> Any:
    settings = _require_settings()
    output_format = fmt.lower()
    if output_format not in {"json", "text"}:
        raise HTTPException(status_code=422, detail="Unsupported format")

    body = await request.body()
    if len(body) > settings.max_report_bytes:
        raise HTTPException(status_code=413, detail="Report too large")
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("Report body is not valid UTF-8")
        raise HTTPException(status_code=422, detail=ERROR_LINE) from exc

    try:
        rows = await asyncio.to_thread(analyze, text)
    except UptimeError as exc:
        logger.error("Uptime computation failed: %s", exc)
        raise HTTPException(status_code=422, detail=ERROR_LINE) from exc

    if output_format == "text":
        return PlainTextResponse(render_text(rows))
    return render_json(rows)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(
        "charger_uptime.api:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
    )
