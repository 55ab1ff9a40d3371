from __future__ import annotations

import logging
from dataclasses import asdict

from greenconstructhub.data.prices import PriceSource
from greenconstructhub.data.weather import WeatherSource
from greenconstructhub.forecast.request import ForecastRequest
from greenconstructhub.models.market import MATERIALS

logger = logging.getLogger(__name__)


class ForecastParameterCollector:
    """Assembles a ForecastRequest from the price and weather sources."""

    def __init__(self, price_source: PriceSource, weather_source: WeatherSource) -> None:
        self.price_source = price_source
        self.weather_source = weather_source

    def collect(
        self,
        material_id: str,
        region: str,
        timeframe: int,
        current_price: float | None = None,
    ) -> ForecastRequest:
        material = MATERIALS.get(material_id)
        material_name = material.name if material else material_id

        if current_price is None:
            current_price = self.price_source.get_real_time_price(material_id, region)

        analysis = self.price_source.get_market_analysis(material_id)
        weather = self.weather_source.get_forecast(region, days=max(timeframe, 0))
        market_factors = {
            **asdict(analysis.market_trends),
            **self.price_source.get_global_factors(),
        }

        logger.debug(
            "Collected forecast inputs for %s in %s: %d history points, %d weather days",
            material_name, region, len(analysis.price_history), len(weather),
        )

        return ForecastRequest(
            material=material_name,
            region=region,
            timeframe=timeframe,
            current_price=current_price,
            historical_data=[asdict(p) for p in analysis.price_history],
            weather_data=[asdict(w) for w in weather],
            market_factors=market_factors,
        )
