from __future__ import annotations

from greenconstructhub.forecast.collector import ForecastParameterCollector
from greenconstructhub.forecast.fallback import (
    build_default_batch,
    build_error_batch,
    generate_fallback_predictions,
)
from greenconstructhub.forecast.parser import extract_json_object, parse_forecast_response
from greenconstructhub.forecast.prompt import build_forecast_prompt
from greenconstructhub.forecast.request import ForecastRequest
from greenconstructhub.forecast.service import ForecastOutcome, ForecastService

__all__ = [
    "ForecastRequest",
    "ForecastParameterCollector",
    "build_forecast_prompt",
    "extract_json_object",
    "parse_forecast_response",
    "generate_fallback_predictions",
    "build_default_batch",
    "build_error_batch",
    "ForecastService",
    "ForecastOutcome",
]
