"""Turn a model's free-text reply into a PredictionBatch.

Malformed model output never raises. The parser keeps whatever validates
and fills the rest from fallback data:
- no JSON object, or invalid JSON -> the full default batch
- missing, empty or invalid dailyPredictions -> fallback predictions
- any other invalid field -> that field from the default batch
"""

from __future__ import annotations

import dataclasses
import json
import logging
import random
import re
from datetime import date

from greenconstructhub.forecast.fallback import build_default_batch
from greenconstructhub.models.prediction import (
    FIELD_PARSERS,
    PredictionBatch,
    PredictionValidationError,
)

logger = logging.getLogger(__name__)

# Greedy: first "{" through the last "}"
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> str | None:
    """Return the span from the first ``{`` to the last ``}``, or None."""
    match = _JSON_OBJECT_RE.search(text)
    return match.group(0) if match else None


def parse_forecast_response(
    text: str,
    current_price: float,
    timeframe: int,
    today: date | None = None,
    rng: random.Random | None = None,
) -> PredictionBatch:
    """Parse the model reply, degrading to fallback data instead of failing."""
    default = build_default_batch(current_price, timeframe, today, rng)

    raw = extract_json_object(text)
    if raw is None:
        logger.warning("No JSON object in model reply, using fallback predictions")
        return default

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse model reply as JSON: %s", e)
        return default

    if not isinstance(data, dict):
        logger.warning("Model reply JSON is %s, not an object", type(data).__name__)
        return default

    try:
        batch = PredictionBatch.from_dict(data)
    except PredictionValidationError as e:
        logger.warning("Model reply incomplete (%s), filling from fallback", e)
        return _salvage(data, default)

    if not batch.daily_predictions:
        logger.warning("Model reply has no daily predictions, using fallback predictions")
        return _salvage(data, default)

    return batch


# Wire key -> PredictionBatch attribute
_ATTRIBUTES = {
    "dailyPredictions": "daily_predictions",
    "overallTrend": "overall_trend",
    "averageConfidence": "average_confidence",
    "keyInsights": "key_insights",
    "riskFactors": "risk_factors",
    "recommendations": "recommendations",
    "marketVolatility": "market_volatility",
    "priceRange": "price_range",
}


def _salvage(data: dict, default: PredictionBatch) -> PredictionBatch:
    """Keep each top-level field that validates on its own, default the rest."""
    kept = {}
    for key, parser in FIELD_PARSERS.items():
        if key not in data:
            continue
        try:
            value = parser(data[key])
        except PredictionValidationError as e:
            logger.debug("Dropping invalid %s from model reply: %s", key, e)
            continue
        if key == "dailyPredictions" and not value:
            continue
        kept[_ATTRIBUTES[key]] = value
    return dataclasses.replace(default, **kept)
