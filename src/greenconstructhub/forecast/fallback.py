"""Placeholder predictions used when the model reply is unusable.

The generator is not a forecasting model: each day is the base price with
an independent uniform ±5% perturbation. Its only job is to return a
structurally valid batch.
"""

from __future__ import annotations

import random
from datetime import date, timedelta

from greenconstructhub.models.prediction import (
    DailyPrediction,
    PredictionBatch,
    PriceRange,
    Recommendations,
    Trend,
    Volatility,
)

MAX_VARIATION = 0.05
CONFIDENCE_MIN = 60
CONFIDENCE_MAX = 90
FALLBACK_FACTORS = ("Market trends", "Regional demand")

ERROR_BASE_PRICE = 1000
ERROR_DAYS = 30


def generate_fallback_predictions(
    base_price: float,
    days: int,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[DailyPrediction]:
    """Return ``days`` predictions starting tomorrow; empty when days <= 0."""
    today = today or date.today()
    rng = rng or random.Random()
    lo = base_price * (1 - MAX_VARIATION)
    hi = base_price * (1 + MAX_VARIATION)

    predictions = []
    for i in range(1, days + 1):
        variation = (rng.random() - 0.5) * 2 * MAX_VARIATION
        price = min(max(round(base_price * (1 + variation), 2), lo), hi)
        predictions.append(
            DailyPrediction(
                date=(today + timedelta(days=i)).isoformat(),
                predicted_price=price,
                confidence=round(CONFIDENCE_MIN + rng.random() * (CONFIDENCE_MAX - CONFIDENCE_MIN)),
                factors=FALLBACK_FACTORS,
            )
        )
    return predictions


def build_default_batch(
    current_price: float,
    timeframe: int,
    today: date | None = None,
    rng: random.Random | None = None,
) -> PredictionBatch:
    """Full batch returned when the model reply cannot be parsed at all."""
    return PredictionBatch(
        daily_predictions=tuple(generate_fallback_predictions(current_price, timeframe, today, rng)),
        overall_trend=Trend.STABLE,
        average_confidence=75,
        key_insights=("AI analysis temporarily unavailable", "Using fallback predictions"),
        risk_factors=("Market volatility", "Weather conditions"),
        recommendations=Recommendations(
            for_buyers="Monitor prices closely for optimal purchase timing",
            for_sellers="Current market conditions are stable",
        ),
        market_volatility=Volatility.MEDIUM,
        price_range=PriceRange(
            min=current_price * (1 - MAX_VARIATION),
            max=current_price * (1 + MAX_VARIATION),
        ),
    )


def build_error_batch(today: date | None = None, rng: random.Random | None = None) -> PredictionBatch:
    """Batch attached to a failed request so callers always get a usable shape."""
    return PredictionBatch(
        daily_predictions=tuple(
            generate_fallback_predictions(ERROR_BASE_PRICE, ERROR_DAYS, today, rng)
        ),
        overall_trend=Trend.STABLE,
        average_confidence=60,
        key_insights=("Service temporarily unavailable",),
        risk_factors=("Technical issues",),
        recommendations=Recommendations(
            for_buyers="Check back later for updated predictions",
            for_sellers="Use historical data for reference",
        ),
        market_volatility=Volatility.MEDIUM,
        price_range=PriceRange(min=950, max=1050),
    )
