from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Material:
    id: str
    name: str
    unit: str
    category: str
    description: str
    base_price: float
    weather_sensitive: bool = False


MATERIALS: dict[str, Material] = {
    m.id: m
    for m in (
        Material("1", "Cement (OPC 53)", "bag", "Cement", "Ordinary Portland Cement Grade 53", 420, True),
        Material("2", "TMT Steel Bars", "kg", "Steel", "Thermo Mechanically Treated Steel", 75),
        Material("3", "River Sand", "cu.ft", "Sand", "Fine aggregate for construction", 45, True),
        Material("4", "Blue Metal", "cu.ft", "Gravel", "20mm aggregate stone", 50, True),
        Material("5", "Red Bricks", "piece", "Bricks", "Clay fired building bricks", 8, True),
        Material("6", "Concrete Blocks", "piece", "Bricks", "Precast concrete blocks", 25, True),
    )
}

DEFAULT_BASE_PRICE = 100.0

# Price multiplier relative to Coimbatore for each Tamil Nadu region
REGIONAL_MULTIPLIERS: dict[str, float] = {
    "Chennai": 1.15,
    "Coimbatore": 1.0,
    "Madurai": 0.95,
    "Tiruchirappalli": 0.92,
    "Salem": 0.90,
    "Tirunelveli": 0.88,
    "Erode": 0.95,
    "Vellore": 1.05,
    "Thoothukudi": 1.08,
    "Dindigul": 0.85,
    "Thanjavur": 0.87,
    "Tiruppur": 0.98,
    "Hosur": 1.12,
    "Nagercoil": 0.82,
    "Karur": 0.89,
}

DEFAULT_REGION = "Coimbatore"


@dataclass(frozen=True)
class PricePoint:
    date: str
    price: float


@dataclass(frozen=True)
class MarketTrends:
    demand_index: float
    supply_index: float
    volatility: float
    seasonal_factor: float


@dataclass
class MarketData:
    material_id: str
    current_price: float
    price_history: list[PricePoint]
    market_trends: MarketTrends
    regional_variations: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PriceAlert:
    type: str  # price_increase | price_decrease
    percentage: float
    current_price: float
    timestamp: str


@dataclass(frozen=True)
class WeatherDay:
    date: str
    temperature: float
    humidity: float
    rainfall: float
    condition: str
    impact_score: float


@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    humidity: float
    condition: str
    wind_speed: float
    pressure: float
    visibility: float
