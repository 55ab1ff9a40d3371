"""CLI entry point for GreenConstructHub.

Provides commands for:
  - forecast: Run an AI price forecast for a catalog material
  - prices: Show current prices for every material in a region
  - weather: Show the construction weather outlook for a city
  - serve: Run the API server
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from greenconstructhub.config import ConfigError, load_config
from greenconstructhub.models.market import DEFAULT_REGION, MATERIALS


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_forecast(args: argparse.Namespace) -> None:
    """Run an AI price forecast."""
    from greenconstructhub.data.prices import SimulatedPriceSource
    from greenconstructhub.data.weather import SimulatedWeatherSource
    from greenconstructhub.forecast.collector import ForecastParameterCollector
    from greenconstructhub.forecast.service import ForecastService
    from greenconstructhub.inference.gateway import InferenceGateway

    try:
        config = load_config().validate("gemini_api_key")
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    gateway = InferenceGateway.from_config(config)
    collector = ForecastParameterCollector(SimulatedPriceSource(), SimulatedWeatherSource())
    service = ForecastService(gateway, collector)

    async def _run():
        await gateway.start()
        try:
            return await service.forecast_material(
                args.material, args.region, args.days, current_price=args.price
            )
        finally:
            await gateway.close()

    outcome = asyncio.run(_run())

    if args.json:
        print(json.dumps(outcome.body, indent=2))
    else:
        if not outcome.ok:
            print(f"Forecast failed: {outcome.body['error']}")
            print("Showing fallback data.\n")
        batch = outcome.batch
        material = MATERIALS.get(args.material)
        name = material.name if material else args.material
        print(f"{name} in {args.region}: {len(batch.daily_predictions)} days")
        print(f"  Trend: {batch.overall_trend.value}  Volatility: {batch.market_volatility.value}")
        print(f"  Range: ₹{batch.price_range.min:,.2f} - ₹{batch.price_range.max:,.2f}")
        print(f"  Avg confidence: {batch.average_confidence}%")
        for p in batch.daily_predictions[:args.show]:
            print(f"  {p.date}  ₹{p.predicted_price:>10,.2f}  ({p.confidence}%)")
        if batch.key_insights:
            print("\nInsights:")
            for insight in batch.key_insights:
                print(f"  - {insight}")

    if not outcome.ok:
        sys.exit(1)


def cmd_prices(args: argparse.Namespace) -> None:
    """Show current prices for all materials."""
    from greenconstructhub.data.prices import SimulatedPriceSource

    prices = SimulatedPriceSource()
    print(f"Material prices in {args.region}:")
    for m in MATERIALS.values():
        price = prices.get_real_time_price(m.id, args.region)
        print(f"  {m.id}. {m.name:20s} ₹{price:>8,.2f} / {m.unit}")


def cmd_weather(args: argparse.Namespace) -> None:
    """Show the weather outlook."""
    from greenconstructhub.data.weather import SimulatedWeatherSource

    forecast = SimulatedWeatherSource().get_forecast(args.city, days=args.days)
    print(f"Weather outlook for {args.city}:")
    for d in forecast:
        print(
            f"  {d.date}  {d.condition:14s} {d.temperature:5.1f}°C "
            f"rain={d.rainfall:5.1f}mm impact={d.impact_score:+.3f}"
        )


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API server."""
    import uvicorn

    from greenconstructhub.api.app import create_app

    config = load_config()
    uvicorn.run(
        create_app(use_lifespan=True),
        host=args.host or config.host,
        port=args.port or config.port,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="greenconstructhub",
        description="Construction material price forecasting for Tamil Nadu",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subs = parser.add_subparsers(dest="command", required=True)

    # forecast
    p_forecast = subs.add_parser("forecast", help="Run an AI price forecast")
    p_forecast.add_argument("material", help="Material id from the catalog (1-6)")
    p_forecast.add_argument("--region", default=DEFAULT_REGION, help="Tamil Nadu region")
    p_forecast.add_argument("--days", type=int, default=30, help="Forecast horizon in days")
    p_forecast.add_argument("--price", type=float, default=None, help="Override current price")
    p_forecast.add_argument("--show", type=int, default=10, help="Daily rows to print")
    p_forecast.add_argument("--json", action="store_true", help="Print the raw JSON payload")

    # prices
    p_prices = subs.add_parser("prices", help="Show current material prices")
    p_prices.add_argument("--region", default=DEFAULT_REGION, help="Tamil Nadu region")

    # weather
    p_weather = subs.add_parser("weather", help="Show the construction weather outlook")
    p_weather.add_argument("city", nargs="?", default=DEFAULT_REGION)
    p_weather.add_argument("--days", type=int, default=7)

    # serve
    p_serve = subs.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    commands = {
        "forecast": cmd_forecast,
        "prices": cmd_prices,
        "weather": cmd_weather,
        "serve": cmd_serve,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
