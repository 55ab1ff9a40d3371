"""FastAPI application factory with permissive CORS and lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from greenconstructhub.api.deps import app_state
from greenconstructhub.config import AppConfig, load_config
from greenconstructhub.data.prices import SimulatedPriceSource
from greenconstructhub.data.weather import SimulatedWeatherSource
from greenconstructhub.forecast.collector import ForecastParameterCollector
from greenconstructhub.forecast.service import ForecastService
from greenconstructhub.inference.gateway import InferenceGateway
from greenconstructhub.notify.email import EmailSender

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def build_state(config: AppConfig) -> None:
    """Wire services from config into app_state."""
    gateway = InferenceGateway.from_config(config)
    price_source = SimulatedPriceSource()
    weather_source = SimulatedWeatherSource()
    collector = ForecastParameterCollector(price_source, weather_source)

    app_state.config = config
    app_state.gateway = gateway
    app_state.price_source = price_source
    app_state.weather_source = weather_source
    app_state.forecast_service = ForecastService(gateway, collector)
    app_state.email_sender = EmailSender.from_config(config)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load and validate config once, then start/stop the HTTP clients."""
    config = load_config().validate("gemini_api_key")
    missing_email = config.missing("resend_api_key", "email_from")
    if missing_email:
        logger.warning("Email proxy disabled, missing: %s", ", ".join(missing_email))

    build_state(config)
    await app_state.gateway.start()
    await app_state.email_sender.start()
    logger.info("API started: model %s, timeout %.0fs", config.gemini_model, config.inference_timeout_seconds)
    yield

    await app_state.gateway.close()
    await app_state.email_sender.close()
    logger.info("API shutdown complete")


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Allow every origin; answer preflight requests with an empty 200."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


def create_app(*, use_lifespan: bool = True) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        use_lifespan: If False, skip the production lifespan (useful for testing
            where deps are injected via app_state directly).
    """
    app = FastAPI(
        title="GreenConstructHub API",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(PermissiveCORSMiddleware)

    from greenconstructhub.api.routes import email, forecast, market, system

    # Forecast keeps the serverless function path the web client already calls
    app.include_router(forecast.router, prefix="/functions/v1", tags=["forecast"])
    app.include_router(forecast.api_router, prefix="/api", tags=["forecast"])
    app.include_router(email.router, prefix="/api", tags=["email"])
    app.include_router(market.router, prefix="/api", tags=["market"])
    app.include_router(system.router, prefix="/api", tags=["system"])

    return app
