"""Material price, market and weather endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query

from greenconstructhub.api.deps import get_price_source, get_weather_source
from greenconstructhub.data.prices import PriceSource
from greenconstructhub.data.weather import WeatherSource
from greenconstructhub.models.market import DEFAULT_REGION, MATERIALS, REGIONAL_MULTIPLIERS

router = APIRouter()


def _require_material(material_id: str) -> None:
    if material_id not in MATERIALS:
        raise HTTPException(status_code=404, detail=f"Unknown material: {material_id}")


@router.get("/materials")
def list_materials() -> dict:
    """Material catalog and the regions prices are quoted for."""
    return {
        "materials": [
            {
                "id": m.id,
                "name": m.name,
                "unit": m.unit,
                "category": m.category,
                "description": m.description,
                "weatherSensitive": m.weather_sensitive,
            }
            for m in MATERIALS.values()
        ],
        "regions": list(REGIONAL_MULTIPLIERS),
    }


@router.get("/materials/{material_id}/price")
def material_price(
    material_id: str,
    region: str = Query(DEFAULT_REGION),
    prices: PriceSource = Depends(get_price_source),
) -> dict:
    _require_material(material_id)
    return {
        "materialId": material_id,
        "region": region,
        "price": prices.get_real_time_price(material_id, region),
        "unit": MATERIALS[material_id].unit,
    }


@router.get("/materials/{material_id}/analysis")
def material_analysis(
    material_id: str,
    prices: PriceSource = Depends(get_price_source),
) -> dict:
    _require_material(material_id)
    return prices.get_market_analysis(material_id).to_dict()


@router.get("/materials/{material_id}/alerts")
def material_alerts(
    material_id: str,
    threshold: float = Query(5.0, ge=0, le=100, description="Minimum move, in percent"),
    prices: PriceSource = Depends(get_price_source),
) -> dict:
    _require_material(material_id)
    alerts = [asdict(a) for a in prices.get_price_alerts(material_id, threshold)]
    return {"alerts": alerts, "count": len(alerts)}


@router.get("/market/global-factors")
def global_factors(prices: PriceSource = Depends(get_price_source)) -> dict:
    return prices.get_global_factors()


@router.get("/weather/{city}/forecast")
def weather_forecast(
    city: str,
    days: int = Query(30, ge=1, le=90),
    weather: WeatherSource = Depends(get_weather_source),
) -> dict:
    return {"city": city, "forecast": [asdict(d) for d in weather.get_forecast(city, days=days)]}


@router.get("/weather/{city}/current")
def current_weather(
    city: str,
    weather: WeatherSource = Depends(get_weather_source),
) -> dict:
    return {"city": city, **asdict(weather.get_current_weather(city))}
