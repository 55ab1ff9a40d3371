from __future__ import annotations

import json
from datetime import date, timedelta

from greenconstructhub.forecast.request import ForecastRequest

_PROMPT_TEMPLATE = """\
As an AI construction materials price forecasting expert, analyze the following data and provide accurate predictions:

Material: {material}
Region: {region} (Tamil Nadu, India)
Forecast Period: {timeframe} days
Current Price: ₹{current_price} per unit

Historical Price Data: {historical}
Weather Forecast: {weather}
Market Factors: {market}

Provide a comprehensive forecast analysis including:
1. Daily price predictions for the next {timeframe} days
2. Price trend analysis (increasing/decreasing/stable)
3. Confidence levels (60-95%) for each prediction
4. Key factors influencing prices
5. Risk assessment
6. Recommendations for buyers/sellers

Format your response as a JSON object with the following structure:
{{
  "dailyPredictions": [
    {{
      "date": "{first_date}",
      "predictedPrice": {current_price},
      "confidence": 80,
      "factors": ["factor1", "factor2"]
    }}
  ],
  "overallTrend": "increasing|decreasing|stable",
  "averageConfidence": number,
  "keyInsights": ["insight1", "insight2"],
  "riskFactors": ["risk1", "risk2"],
  "recommendations": {{
    "forBuyers": "recommendation text",
    "forSellers": "recommendation text"
  }},
  "marketVolatility": "low|medium|high",
  "priceRange": {{
    "min": number,
    "max": number
  }}
}}

Rules:
- "dailyPredictions" must contain exactly {timeframe} entries, one per day starting {first_date}, dates in YYYY-MM-DD format
- "confidence" is an integer between 60 and 95
- "predictedPrice" is a positive number in the same unit as the current price
- Ensure all predictions are realistic based on construction material market dynamics in Tamil Nadu.
- Return ONLY valid JSON. No markdown, no code fences, no commentary outside the JSON."""


def _to_json(value: object) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _format_price(price: float) -> str:
    return str(int(price)) if float(price).is_integer() else str(price)


def build_forecast_prompt(request: ForecastRequest, today: date | None = None) -> str:
    """Render the forecast instruction for one request.

    Output depends only on the request and ``today``; tomorrow's date is the
    first expected prediction date. Inputs are not validated.
    """
    today = today or date.today()
    return _PROMPT_TEMPLATE.format(
        material=request.material,
        region=request.region,
        timeframe=request.timeframe,
        current_price=_format_price(request.current_price),
        historical=_to_json(request.historical_data),
        weather=_to_json(request.weather_data),
        market=_to_json(request.market_factors),
        first_date=(today + timedelta(days=1)).isoformat(),
    )
