"""Forecast pipeline: prompt -> remote inference -> parse, behind one error boundary."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date

from greenconstructhub.forecast.collector import ForecastParameterCollector
from greenconstructhub.forecast.fallback import build_error_batch
from greenconstructhub.forecast.parser import parse_forecast_response
from greenconstructhub.forecast.prompt import build_forecast_prompt
from greenconstructhub.forecast.request import ForecastRequest
from greenconstructhub.inference.gateway import InferenceGateway
from greenconstructhub.models.prediction import PredictionBatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastOutcome:
    status_code: int
    body: dict
    batch: PredictionBatch | None = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class ForecastService:
    """Runs one forecast request end to end.

    Stateless across calls. Any exception raised while handling a request
    becomes a 500 outcome carrying the error message and a full fallback
    batch; malformed model output is recovered by the parser and stays 200.
    """

    def __init__(
        self,
        gateway: InferenceGateway,
        collector: ForecastParameterCollector | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.gateway = gateway
        self.collector = collector
        self._rng = rng

    async def run(self, request: ForecastRequest, today: date | None = None) -> PredictionBatch:
        """The success path. Raises on inference or transport failure."""
        logger.info(
            "AI forecast request: material=%s region=%s timeframe=%s",
            request.material, request.region, request.timeframe,
        )
        prompt = build_forecast_prompt(request, today)
        response = await self.gateway.generate(prompt)
        return parse_forecast_response(
            response.content, request.current_price, request.timeframe, today, self._rng
        )

    async def forecast(self, payload: dict | ForecastRequest, today: date | None = None) -> ForecastOutcome:
        """Validate the payload and run the pipeline, never raising."""
        try:
            request = (
                payload if isinstance(payload, ForecastRequest)
                else ForecastRequest.model_validate(payload)
            )
            batch = await self.run(request, today)
        except Exception as e:
            logger.exception("Error in AI forecast")
            return self.failure(e, today)
        return ForecastOutcome(status_code=200, body=batch.to_dict(), batch=batch)

    async def forecast_material(
        self,
        material_id: str,
        region: str,
        timeframe: int,
        current_price: float | None = None,
        today: date | None = None,
    ) -> ForecastOutcome:
        """Collect inputs from the configured sources, then forecast."""
        if self.collector is None:
            raise RuntimeError("ForecastService has no parameter collector")
        try:
            request = self.collector.collect(material_id, region, timeframe, current_price)
        except Exception as e:
            logger.exception("Failed to collect forecast inputs for material %s", material_id)
            return self.failure(e, today)
        return await self.forecast(request, today)

    def failure(self, error: Exception, today: date | None = None) -> ForecastOutcome:
        batch = build_error_batch(today, self._rng)
        return ForecastOutcome(
            status_code=500,
            body={"error": str(error), "fallbackData": batch.to_dict()},
            batch=batch,
        )
