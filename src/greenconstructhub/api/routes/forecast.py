"""AI price forecast endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from greenconstructhub.api.deps import get_forecast_service
from greenconstructhub.forecast.request import MAX_TIMEFRAME
from greenconstructhub.forecast.service import ForecastService
from greenconstructhub.models.market import DEFAULT_REGION

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter()


@router.post("/ai-forecast")
async def ai_forecast(
    request: Request,
    service: ForecastService = Depends(get_forecast_service),
) -> JSONResponse:
    """Forecast daily prices for the material described in the body.

    200 with a prediction batch, or 500 with ``{error, fallbackData}``.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning("AI forecast body is not JSON: %s", e)
        outcome = service.failure(e)
    else:
        outcome = await service.forecast(payload)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)


@api_router.get("/forecast/{material_id}")
async def forecast_material(
    material_id: str,
    region: str = Query(DEFAULT_REGION),
    timeframe: int = Query(30, ge=1, le=MAX_TIMEFRAME),
    service: ForecastService = Depends(get_forecast_service),
) -> JSONResponse:
    """Forecast a catalog material using the server's price and weather sources."""
    outcome = await service.forecast_material(material_id, region, timeframe)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
