from __future__ import annotations

import os
from unittest.mock import AsyncMock, patch

import pytest

from greenconstructhub.cli import main
from greenconstructhub.forecast.fallback import build_error_batch
from greenconstructhub.forecast.service import ForecastOutcome


class TestCLIParsing:
    def test_no_command_fails(self) -> None:
        with pytest.raises(SystemExit):
            main([])

    def test_help_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_forecast_command_parses(self) -> None:
        with patch("greenconstructhub.cli.cmd_forecast") as mock_cmd:
            main(["forecast", "2", "--region", "Chennai", "--days", "14", "--price", "80"])
            args = mock_cmd.call_args[0][0]
            assert args.material == "2"
            assert args.region == "Chennai"
            assert args.days == 14
            assert args.price == 80.0

    def test_forecast_defaults(self) -> None:
        with patch("greenconstructhub.cli.cmd_forecast") as mock_cmd:
            main(["forecast", "1"])
            args = mock_cmd.call_args[0][0]
            assert args.region == "Coimbatore"
            assert args.days == 30
            assert args.price is None
            assert args.json is False

    def test_serve_command(self) -> None:
        with patch("greenconstructhub.cli.cmd_serve") as mock_cmd:
            main(["serve", "--port", "9001"])
            assert mock_cmd.call_args[0][0].port == 9001

    def test_weather_default_city(self) -> None:
        with patch("greenconstructhub.cli.cmd_weather") as mock_cmd:
            main(["weather"])
            assert mock_cmd.call_args[0][0].city == "Coimbatore"


class TestCommands:
    def test_prices_prints_catalog(self, capsys) -> None:
        main(["prices", "--region", "Madurai"])
        out = capsys.readouterr().out
        assert "Material prices in Madurai" in out
        assert "Cement (OPC 53)" in out
        assert "Concrete Blocks" in out

    def test_weather_prints_days(self, capsys) -> None:
        main(["weather", "Salem", "--days", "3"])
        out = capsys.readouterr().out
        assert out.count("impact=") == 3

    def test_forecast_without_key_exits(self, capsys) -> None:
        with patch.dict(os.environ, {"GEMINI_API_KEY": ""}):
            with pytest.raises(SystemExit) as exc_info:
                main(["forecast", "1"])
        assert exc_info.value.code == 2
        assert "GEMINI_API_KEY" in capsys.readouterr().err

    def test_forecast_failure_prints_fallback(self, capsys) -> None:
        batch = build_error_batch()
        outcome = ForecastOutcome(
            status_code=500,
            body={"error": "Inference API error: 503", "fallbackData": batch.to_dict()},
            batch=batch,
        )
        with patch.dict(os.environ, {"GEMINI_API_KEY": "gm-test"}):
            with patch(
                "greenconstructhub.forecast.service.ForecastService.forecast_material",
                new_callable=AsyncMock,
                return_value=outcome,
            ):
                with pytest.raises(SystemExit) as exc_info:
                    main(["forecast", "1", "--show", "2"])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Forecast failed: Inference API error: 503" in out
        assert "30 days" in out
        assert "Service temporarily unavailable" in out
