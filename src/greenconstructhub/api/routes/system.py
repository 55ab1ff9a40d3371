"""System health endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from greenconstructhub.api.deps import get_config
from greenconstructhub.config import AppConfig

router = APIRouter()

_start_time = time.time()


@router.get("/system/health")
def health_check(config: AppConfig = Depends(get_config)) -> dict:
    """System health check.

    {status, model, apiKeys, uptime}
    """
    api_keys = {
        "Gemini": bool(config.gemini_api_key),
        "Resend": bool(config.resend_api_key and config.email_from),
    }
    return {
        "status": "healthy" if api_keys["Gemini"] else "degraded",
        "model": config.gemini_model,
        "apiKeys": api_keys,
        "uptime": int(time.time() - _start_time),
    }
