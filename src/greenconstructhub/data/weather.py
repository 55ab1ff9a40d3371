"""Weather sources for construction-impact forecasting."""

from __future__ import annotations

import abc
import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta

from greenconstructhub.models.market import CurrentWeather, WeatherDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonalPattern:
    temp_range: tuple[float, float]
    rain_chance: float
    conditions: tuple[str, ...]


# Tamil Nadu seasonal weather patterns
SEASONAL_PATTERNS: dict[str, SeasonalPattern] = {
    "winter": SeasonalPattern((22, 32), 0.1, ("sunny", "partly_cloudy")),
    "summer": SeasonalPattern((28, 42), 0.05, ("sunny", "hot")),
    "monsoon": SeasonalPattern((24, 35), 0.7, ("rainy", "cloudy", "thunderstorms")),
    "post_monsoon": SeasonalPattern((25, 35), 0.3, ("partly_cloudy", "cloudy")),
}


def season_for(day: date) -> str:
    month = day.month
    if month in (12, 1, 2):
        return "winter"
    if 3 <= month <= 6:
        return "summer"
    if 7 <= month <= 10:
        return "monsoon"
    return "post_monsoon"


def construction_impact(condition: str, temperature: float, rainfall: float) -> float:
    """Score in [-0.4, 0.05]: how the weather helps or hinders site work."""
    if condition == "rainy" and rainfall > 20:
        return -0.25
    if condition == "thunderstorms":
        return -0.40
    if temperature > 38:
        return -0.10
    if condition == "sunny" and temperature < 35:
        return 0.05
    if condition == "partly_cloudy":
        return 0.02
    return 0.0


class WeatherSource(abc.ABC):
    """Source of weather forecasts for a city."""

    @abc.abstractmethod
    def get_forecast(self, city: str, days: int = 30) -> list[WeatherDay]:
        """Daily forecast starting today."""
        ...

    @abc.abstractmethod
    def get_current_weather(self, city: str) -> CurrentWeather:
        """Current conditions."""
        ...


class SimulatedWeatherSource(WeatherSource):
    """Seasonal random weather for Tamil Nadu cities."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def get_forecast(self, city: str, days: int = 30, today: date | None = None) -> list[WeatherDay]:
        today = today or date.today()
        try:
            return [self._simulate_day(today + timedelta(days=i)) for i in range(days)]
        except (KeyError, ValueError, OverflowError):
            logger.exception("Weather simulation failed for %s, using fallback data", city)
            return self.fallback_forecast(days, today)

    def _simulate_day(self, day: date) -> WeatherDay:
        season = season_for(day)
        pattern = SEASONAL_PATTERNS[season]
        lo, hi = pattern.temp_range

        temperature = lo + self._rng.random() * (hi - lo)
        will_rain = self._rng.random() < pattern.rain_chance
        condition = self._rng.choice(pattern.conditions)

        rainfall = 0.0
        if will_rain:
            rainfall = self._rng.random() * (80 if season == "monsoon" else 20)

        humidity = 65 + self._rng.random() * 25

        return WeatherDay(
            date=day.isoformat(),
            temperature=round(temperature, 1),
            humidity=round(humidity),
            rainfall=round(rainfall, 1),
            condition=condition,
            impact_score=round(construction_impact(condition, temperature, rainfall), 3),
        )

    def fallback_forecast(self, days: int, today: date | None = None) -> list[WeatherDay]:
        """Unseasonal forecast used when the seasonal model cannot run."""
        today = today or date.today()
        r = self._rng.random
        return [
            WeatherDay(
                date=(today + timedelta(days=i)).isoformat(),
                temperature=30 + r() * 8,
                humidity=70 + r() * 20,
                rainfall=r() * 10,
                condition=self._rng.choice(("sunny", "partly_cloudy", "rainy")),
                impact_score=(r() - 0.5) * 0.2,
            )
            for i in range(days)
        ]

    def get_current_weather(self, city: str) -> CurrentWeather:
        r = self._rng.random
        return CurrentWeather(
            temperature=28 + r() * 12,
            humidity=60 + r() * 30,
            condition=self._rng.choice(("sunny", "partly_cloudy", "rainy", "cloudy")),
            wind_speed=5 + r() * 15,
            pressure=1010 + r() * 20,
            visibility=8 + r() * 2,
        )
