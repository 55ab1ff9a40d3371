"""Dependency injection for the FastAPI application."""

from __future__ import annotations

from greenconstructhub.config import AppConfig
from greenconstructhub.data.prices import PriceSource
from greenconstructhub.data.weather import WeatherSource
from greenconstructhub.forecast.service import ForecastService
from greenconstructhub.inference.gateway import InferenceGateway
from greenconstructhub.notify.email import EmailSender


class AppState:
    """Holds shared application state initialised during lifespan."""

    def __init__(self) -> None:
        self.config: AppConfig | None = None
        self.gateway: InferenceGateway | None = None
        self.forecast_service: ForecastService | None = None
        self.price_source: PriceSource | None = None
        self.weather_source: WeatherSource | None = None
        self.email_sender: EmailSender | None = None


# Singleton shared across the app
app_state = AppState()


def get_config() -> AppConfig:
    if app_state.config is None:
        raise RuntimeError("AppConfig not initialised")
    return app_state.config


def get_forecast_service() -> ForecastService:
    if app_state.forecast_service is None:
        raise RuntimeError("ForecastService not initialised")
    return app_state.forecast_service


def get_price_source() -> PriceSource:
    if app_state.price_source is None:
        raise RuntimeError("PriceSource not initialised")
    return app_state.price_source


def get_weather_source() -> WeatherSource:
    if app_state.weather_source is None:
        raise RuntimeError("WeatherSource not initialised")
    return app_state.weather_source


def get_email_sender() -> EmailSender:
    if app_state.email_sender is None:
        raise RuntimeError("EmailSender not initialised")
    return app_state.email_sender
