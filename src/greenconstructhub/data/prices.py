"""Material price sources.

PriceSource is the seam for commodity price data. SimulatedPriceSource
generates plausible Tamil Nadu market data until a real feed is wired in:
- Real-time price per material and region
- 90-day price history with market trend indicators
- Threshold-based price movement alerts
- Global macro factors
"""

from __future__ import annotations

import abc
import logging
import math
import random
from datetime import date, datetime, timedelta, timezone

from greenconstructhub.models.market import (
    DEFAULT_BASE_PRICE,
    DEFAULT_REGION,
    MATERIALS,
    REGIONAL_MULTIPLIERS,
    MarketData,
    MarketTrends,
    PriceAlert,
    PricePoint,
)

logger = logging.getLogger(__name__)

HISTORY_DAYS = 90

# Regions reported in a market analysis, a subset of REGIONAL_MULTIPLIERS
_ANALYSIS_REGIONS = ("Chennai", "Coimbatore", "Madurai", "Tiruchirappalli", "Salem")


class PriceSource(abc.ABC):
    """Source of material prices and market indicators."""

    @abc.abstractmethod
    def get_real_time_price(self, material_id: str, region: str) -> float:
        """Current price for a material in a region."""
        ...

    @abc.abstractmethod
    def get_market_analysis(self, material_id: str) -> MarketData:
        """Price history and trend indicators for a material."""
        ...

    @abc.abstractmethod
    def get_price_alerts(self, material_id: str, threshold_percentage: float) -> list[PriceAlert]:
        """Price movements larger than the threshold."""
        ...

    @abc.abstractmethod
    def get_global_factors(self) -> dict[str, float]:
        """Macro factors affecting all material prices."""
        ...


class SimulatedPriceSource(PriceSource):
    """Randomised price data anchored on catalog base prices.

    Pass a seeded ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def get_real_time_price(self, material_id: str, region: str) -> float:
        material = MATERIALS.get(material_id)
        base_price = material.base_price if material else DEFAULT_BASE_PRICE
        multiplier = REGIONAL_MULTIPLIERS.get(region, 1.0)
        # ±3% market fluctuation
        fluctuation = 0.97 + self._rng.random() * 0.06
        return round(base_price * multiplier * fluctuation, 2)

    def get_market_analysis(self, material_id: str, today: date | None = None) -> MarketData:
        today = today or date.today()
        current_price = self.get_real_time_price(material_id, DEFAULT_REGION)

        start = today - timedelta(days=HISTORY_DAYS)
        history = []
        for i in range(HISTORY_DAYS):
            seasonal = math.sin((i / 365) * 2 * math.pi) * 0.1
            noise = (self._rng.random() - 0.5) * 0.05
            history.append(
                PricePoint(
                    date=(start + timedelta(days=i)).isoformat(),
                    price=round(current_price * (1 + seasonal + noise), 2),
                )
            )

        trends = MarketTrends(
            demand_index=0.6 + self._rng.random() * 0.4,
            supply_index=0.7 + self._rng.random() * 0.3,
            volatility=self._rng.random() * 0.3,
            seasonal_factor=math.sin(((today.month - 1) / 12) * 2 * math.pi) * 0.1,
        )

        return MarketData(
            material_id=material_id,
            current_price=current_price,
            price_history=history,
            market_trends=trends,
            regional_variations={r: REGIONAL_MULTIPLIERS[r] for r in _ANALYSIS_REGIONS},
        )

    def get_price_alerts(self, material_id: str, threshold_percentage: float) -> list[PriceAlert]:
        current_price = self.get_real_time_price(material_id, DEFAULT_REGION)
        alerts: list[PriceAlert] = []

        # 30% chance of a significant movement, up to ±10%
        if self._rng.random() > 0.7:
            change = (self._rng.random() - 0.5) * 0.2
            if abs(change) > threshold_percentage / 100:
                alerts.append(
                    PriceAlert(
                        type="price_increase" if change > 0 else "price_decrease",
                        percentage=round(abs(change * 100), 2),
                        current_price=current_price,
                        timestamp=datetime.now(timezone.utc).isoformat(),
                    )
                )
                logger.info(
                    "Price alert for material %s: %s %.2f%%",
                    material_id, alerts[-1].type, alerts[-1].percentage,
                )

        return alerts

    def get_global_factors(self) -> dict[str, float]:
        r = self._rng.random
        return {
            "oil_price_impact": r() * 0.1 - 0.05,
            "currency_fluctuation": r() * 0.08 - 0.04,
            "global_demand": 0.8 + r() * 0.4,
            "supply_chain_index": 0.7 + r() * 0.3,
            "government_policy_impact": r() * 0.06 - 0.03,
        }
