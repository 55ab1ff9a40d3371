from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum


class PredictionValidationError(ValueError):
    """Raised when a prediction payload is missing fields or has the wrong shape."""


CONFIDENCE_MIN = 60
CONFIDENCE_MAX = 95


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class Volatility(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _require(data: dict, key: str) -> object:
    if key not in data:
        raise PredictionValidationError(f"Missing required field: {key}")
    return data[key]


def _number(value: object, name: str) -> int | float:
    # bool is an int subclass; JSON true/false is not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PredictionValidationError(f"{name} must be a number, got {value!r}")
    # json.loads accepts NaN and Infinity, which cannot be written back out
    if isinstance(value, float) and not math.isfinite(value):
        raise PredictionValidationError(f"{name} must be finite, got {value!r}")
    return value


def _string(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise PredictionValidationError(f"{name} must be a string, got {value!r}")
    return value


def _string_list(value: object, name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise PredictionValidationError(f"{name} must be a list of strings")
    return tuple(_string(v, f"{name}[]") for v in value)


def _mapping(value: object, name: str) -> dict:
    if not isinstance(value, dict):
        raise PredictionValidationError(f"{name} must be an object")
    return value


@dataclass(frozen=True)
class DailyPrediction:
    """One modeled future price point."""

    date: str
    predicted_price: int | float
    confidence: int
    factors: tuple[str, ...] = ()

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    @classmethod
    def from_dict(cls, data: object) -> DailyPrediction:
        data = _mapping(data, "dailyPredictions[]")
        raw_date = _string(_require(data, "date"), "date")
        try:
            date.fromisoformat(raw_date)
        except ValueError as e:
            raise PredictionValidationError(f"date must be YYYY-MM-DD, got {raw_date!r}") from e

        price = _number(_require(data, "predictedPrice"), "predictedPrice")
        if price <= 0:
            raise PredictionValidationError(f"predictedPrice must be positive, got {price}")

        confidence = _number(_require(data, "confidence"), "confidence")
        if isinstance(confidence, float):
            if not confidence.is_integer():
                raise PredictionValidationError(f"confidence must be an integer, got {confidence}")
            confidence = int(confidence)
        if not CONFIDENCE_MIN <= confidence <= CONFIDENCE_MAX:
            raise PredictionValidationError(
                f"confidence must be between {CONFIDENCE_MIN} and {CONFIDENCE_MAX}, got {confidence}"
            )

        return cls(
            date=raw_date,
            predicted_price=price,
            confidence=confidence,
            factors=_string_list(data.get("factors", []), "factors"),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "predictedPrice": self.predicted_price,
            "confidence": self.confidence,
            "factors": list(self.factors),
        }


def parse_daily_predictions(value: object) -> tuple[DailyPrediction, ...]:
    """Validate a dailyPredictions list; dates must strictly increase."""
    if not isinstance(value, list):
        raise PredictionValidationError("dailyPredictions must be a list")
    predictions = tuple(DailyPrediction.from_dict(v) for v in value)
    for prev, cur in zip(predictions, predictions[1:]):
        if cur.day <= prev.day:
            raise PredictionValidationError(
                f"dailyPredictions dates must strictly increase: {prev.date} then {cur.date}"
            )
    return predictions


@dataclass(frozen=True)
class Recommendations:
    for_buyers: str
    for_sellers: str

    @classmethod
    def from_dict(cls, data: object) -> Recommendations:
        data = _mapping(data, "recommendations")
        return cls(
            for_buyers=_string(_require(data, "forBuyers"), "forBuyers"),
            for_sellers=_string(_require(data, "forSellers"), "forSellers"),
        )

    def to_dict(self) -> dict:
        return {"forBuyers": self.for_buyers, "forSellers": self.for_sellers}


@dataclass(frozen=True)
class PriceRange:
    min: int | float
    max: int | float

    @classmethod
    def from_dict(cls, data: object) -> PriceRange:
        data = _mapping(data, "priceRange")
        lo = _number(_require(data, "min"), "priceRange.min")
        hi = _number(_require(data, "max"), "priceRange.max")
        if lo > hi:
            raise PredictionValidationError(f"priceRange.min {lo} exceeds max {hi}")
        return cls(min=lo, max=hi)

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


def _enum(enum_cls, value: object, name: str):
    try:
        return enum_cls(_string(value, name))
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise PredictionValidationError(f"{name} must be one of {allowed}, got {value!r}") from e


# Field name -> parser for each top-level PredictionBatch key. The response
# parser uses these individually to keep the valid parts of a partial reply.
FIELD_PARSERS = {
    "dailyPredictions": parse_daily_predictions,
    "overallTrend": lambda v: _enum(Trend, v, "overallTrend"),
    "averageConfidence": lambda v: _number(v, "averageConfidence"),
    "keyInsights": lambda v: _string_list(v, "keyInsights"),
    "riskFactors": lambda v: _string_list(v, "riskFactors"),
    "recommendations": Recommendations.from_dict,
    "marketVolatility": lambda v: _enum(Volatility, v, "marketVolatility"),
    "priceRange": PriceRange.from_dict,
}


@dataclass(frozen=True)
class PredictionBatch:
    """A complete forecast reply: daily predictions plus market commentary."""

    daily_predictions: tuple[DailyPrediction, ...]
    overall_trend: Trend
    average_confidence: int | float
    key_insights: tuple[str, ...]
    risk_factors: tuple[str, ...]
    recommendations: Recommendations
    market_volatility: Volatility
    price_range: PriceRange

    @classmethod
    def from_dict(cls, data: object) -> PredictionBatch:
        data = _mapping(data, "forecast")
        values = {key: parser(_require(data, key)) for key, parser in FIELD_PARSERS.items()}
        return cls(
            daily_predictions=values["dailyPredictions"],
            overall_trend=values["overallTrend"],
            average_confidence=values["averageConfidence"],
            key_insights=values["keyInsights"],
            risk_factors=values["riskFactors"],
            recommendations=values["recommendations"],
            market_volatility=values["marketVolatility"],
            price_range=values["priceRange"],
        )

    def to_dict(self) -> dict:
        return {
            "dailyPredictions": [p.to_dict() for p in self.daily_predictions],
            "overallTrend": self.overall_trend.value,
            "averageConfidence": self.average_confidence,
            "keyInsights": list(self.key_insights),
            "riskFactors": list(self.risk_factors),
            "recommendations": self.recommendations.to_dict(),
            "marketVolatility": self.market_volatility.value,
            "priceRange": self.price_range.to_dict(),
        }
