from __future__ import annotations

import pytest

from greenconstructhub.models import (
    MATERIALS,
    REGIONAL_MULTIPLIERS,
    DailyPrediction,
    PredictionBatch,
    PredictionValidationError,
    PriceRange,
    Trend,
    Volatility,
)


def _batch_dict(**overrides) -> dict:
    data = {
        "dailyPredictions": [
            {"date": "2026-10-20", "predictedPrice": 421.5, "confidence": 82,
             "factors": ["Monsoon demand", "Transport costs"]},
            {"date": "2026-10-21", "predictedPrice": 423, "confidence": 80, "factors": []},
        ],
        "overallTrend": "increasing",
        "averageConfidence": 81,
        "keyInsights": ["Demand rising"],
        "riskFactors": ["Heavy rain"],
        "recommendations": {"forBuyers": "Buy early", "forSellers": "Hold stock"},
        "marketVolatility": "low",
        "priceRange": {"min": 421.5, "max": 423},
    }
    data.update(overrides)
    return data


class TestDailyPrediction:
    def test_from_dict(self) -> None:
        p = DailyPrediction.from_dict(
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 70, "factors": ["a"]}
        )
        assert p.predicted_price == 100
        assert p.factors == ("a",)
        assert p.day.isoformat() == "2026-10-20"

    def test_factors_optional(self) -> None:
        p = DailyPrediction.from_dict({"date": "2026-10-20", "predictedPrice": 1, "confidence": 60})
        assert p.factors == ()

    @pytest.mark.parametrize(
        "entry",
        [
            {"predictedPrice": 100, "confidence": 70},
            {"date": "20/10/2026", "predictedPrice": 100, "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": -5, "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": "100", "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": True, "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 140},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 59},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 96},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 82.5},
            {"date": "2026-10-20", "predictedPrice": float("nan"), "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": float("inf"), "confidence": 70},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": float("nan")},
            {"date": "2026-10-20", "predictedPrice": 100, "confidence": 70, "factors": "rain"},
        ],
    )
    def test_rejects_malformed(self, entry: dict) -> None:
        with pytest.raises(PredictionValidationError):
            DailyPrediction.from_dict(entry)

    def test_integral_float_confidence_becomes_int(self) -> None:
        p = DailyPrediction.from_dict({"date": "2026-10-20", "predictedPrice": 100, "confidence": 80.0})
        assert p.confidence == 80
        assert isinstance(p.confidence, int)

    def test_confidence_bounds_inclusive(self) -> None:
        for value in (60, 95):
            p = DailyPrediction.from_dict({"date": "2026-10-20", "predictedPrice": 1, "confidence": value})
            assert p.confidence == value


class TestPredictionBatch:
    def test_round_trip_preserves_wire_shape(self) -> None:
        data = _batch_dict()
        batch = PredictionBatch.from_dict(data)
        assert batch.overall_trend is Trend.INCREASING
        assert batch.market_volatility is Volatility.LOW
        assert batch.to_dict() == data

    def test_missing_field(self) -> None:
        data = _batch_dict()
        del data["riskFactors"]
        with pytest.raises(PredictionValidationError, match="riskFactors"):
            PredictionBatch.from_dict(data)

    def test_bad_enum(self) -> None:
        with pytest.raises(PredictionValidationError, match="overallTrend"):
            PredictionBatch.from_dict(_batch_dict(overallTrend="sideways"))

    def test_dates_must_increase(self) -> None:
        preds = _batch_dict()["dailyPredictions"]
        with pytest.raises(PredictionValidationError, match="strictly increase"):
            PredictionBatch.from_dict(_batch_dict(dailyPredictions=[preds[1], preds[0]]))

    def test_duplicate_dates_rejected(self) -> None:
        preds = _batch_dict()["dailyPredictions"]
        with pytest.raises(PredictionValidationError):
            PredictionBatch.from_dict(_batch_dict(dailyPredictions=[preds[0], preds[0]]))

    def test_price_range_order(self) -> None:
        with pytest.raises(PredictionValidationError, match="exceeds"):
            PriceRange.from_dict({"min": 10, "max": 5})

    def test_not_an_object(self) -> None:
        with pytest.raises(PredictionValidationError):
            PredictionBatch.from_dict(["not", "a", "dict"])

    def test_frozen(self) -> None:
        batch = PredictionBatch.from_dict(_batch_dict())
        with pytest.raises(AttributeError):
            batch.average_confidence = 1  # type: ignore[misc]


class TestCatalog:
    def test_six_materials(self) -> None:
        assert sorted(MATERIALS) == ["1", "2", "3", "4", "5", "6"]
        assert MATERIALS["1"].base_price == 420
        assert MATERIALS["2"].weather_sensitive is False

    def test_fifteen_regions(self) -> None:
        assert len(REGIONAL_MULTIPLIERS) == 15
        assert REGIONAL_MULTIPLIERS["Coimbatore"] == 1.0
        assert REGIONAL_MULTIPLIERS["Chennai"] == 1.15
