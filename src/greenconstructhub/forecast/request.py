from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_TIMEFRAME = 365


class ForecastRequest(BaseModel):
    """Inputs to one forecast: what to price, where, for how long, and the context data."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    material: str
    region: str
    timeframe: int = Field(ge=0, le=MAX_TIMEFRAME)
    current_price: float = Field(alias="currentPrice", allow_inf_nan=False)
    historical_data: Any = Field(default=None, alias="historicalData")
    weather_data: Any = Field(default=None, alias="weatherData")
    market_factors: Any = Field(default=None, alias="marketFactors")
