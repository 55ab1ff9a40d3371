from __future__ import annotations

from greenconstructhub.data.prices import PriceSource, SimulatedPriceSource
from greenconstructhub.data.weather import SimulatedWeatherSource, WeatherSource

__all__ = [
    "PriceSource",
    "SimulatedPriceSource",
    "WeatherSource",
    "SimulatedWeatherSource",
]
