from __future__ import annotations

from greenconstructhub.models.market import (
    MATERIALS,
    REGIONAL_MULTIPLIERS,
    CurrentWeather,
    MarketData,
    MarketTrends,
    Material,
    PriceAlert,
    PricePoint,
    WeatherDay,
)
from greenconstructhub.models.prediction import (
    DailyPrediction,
    PredictionBatch,
    PredictionValidationError,
    PriceRange,
    Recommendations,
    Trend,
    Volatility,
)

__all__ = [
    # market
    "Material",
    "MATERIALS",
    "REGIONAL_MULTIPLIERS",
    "PricePoint",
    "MarketTrends",
    "MarketData",
    "PriceAlert",
    "WeatherDay",
    "CurrentWeather",
    # prediction
    "DailyPrediction",
    "PredictionBatch",
    "PredictionValidationError",
    "PriceRange",
    "Recommendations",
    "Trend",
    "Volatility",
]
