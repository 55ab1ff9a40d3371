from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from greenconstructhub.config import AppConfig
from greenconstructhub.inference.gateway import (
    InferenceError,
    InferenceGateway,
    InferenceResponse,
    ProviderConfig,
    TransportError,
)


def _gateway() -> InferenceGateway:
    return InferenceGateway(
        ProviderConfig(
            base_url="https://api.test.com/v1beta",
            api_key="gm-test",
            model="gemini-test",
            timeout_seconds=5,
        )
    )


def _ok_response(text: str = '{"dailyPredictions": []}') -> MagicMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.is_success = True
    resp.json.return_value = {
        "candidates": [
            {"content": {"parts": [{"text": text}]}, "finishReason": "STOP"},
        ],
        "usageMetadata": {
            "promptTokenCount": 300,
            "candidatesTokenCount": 120,
            "totalTokenCount": 420,
        },
        "modelVersion": "gemini-test-001",
    }
    return resp


class TestRequestShape:
    def test_url(self) -> None:
        assert _gateway().url == "https://api.test.com/v1beta/models/gemini-test:generateContent"

    def test_body_sampling_parameters(self) -> None:
        body = _gateway().build_body("hello")
        assert body["contents"] == [{"parts": [{"text": "hello"}]}]
        assert body["generationConfig"] == {
            "temperature": 0.7,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 2048,
        }

    def test_from_config(self) -> None:
        cfg = AppConfig(gemini_api_key="k", gemini_model="m", inference_timeout_seconds=12)
        gw = InferenceGateway.from_config(cfg)
        assert gw.config.api_key == "k"
        assert gw.config.model == "m"
        assert gw.config.timeout_seconds == 12


class TestGenerate:
    def test_success(self):
        async def _run():
            gw = _gateway()
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.return_value = _ok_response("forecast text")
            gw._client = mock_client

            result = await gw.generate("prompt")

            assert isinstance(result, InferenceResponse)
            assert result.content == "forecast text"
            assert result.model == "gemini-test-001"
            assert result.token_usage["total_tokens"] == 420
            assert result.latency_ms >= 0

            mock_client.post.assert_called_once()
            call = mock_client.post.call_args
            assert call.args[0].endswith(":generateContent")
            assert call.kwargs["params"] == {"key": "gm-test"}
            assert call.kwargs["timeout"] == 5
            assert call.kwargs["json"]["contents"][0]["parts"][0]["text"] == "prompt"
        asyncio.run(_run())

    def test_joins_multiple_parts(self):
        async def _run():
            gw = _gateway()
            resp = _ok_response()
            resp.json.return_value["candidates"][0]["content"]["parts"] = [
                {"text": '{"a": '}, {"text": "1}"},
            ]
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.return_value = resp
            gw._client = mock_client

            result = await gw.generate("prompt")
            assert result.content == '{"a": 1}'
        asyncio.run(_run())

    def test_non_2xx_raises_inference_error_once(self):
        async def _run():
            gw = _gateway()
            resp = MagicMock()
            resp.status_code = 503
            resp.is_success = False
            resp.text = "Service Unavailable"
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.return_value = resp
            gw._client = mock_client

            with pytest.raises(InferenceError) as exc_info:
                await gw.generate("prompt")

            assert exc_info.value.status_code == 503
            assert "503" in str(exc_info.value)
            assert mock_client.post.call_count == 1
        asyncio.run(_run())

    def test_network_failure_raises_transport_error(self):
        async def _run():
            gw = _gateway()
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.side_effect = httpx.ConnectError("connection refused")
            gw._client = mock_client

            with pytest.raises(TransportError, match="unreachable"):
                await gw.generate("prompt")
            assert mock_client.post.call_count == 1
        asyncio.run(_run())

    def test_timeout_raises_transport_error(self):
        async def _run():
            gw = _gateway()
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.side_effect = httpx.ReadTimeout("slow")
            gw._client = mock_client

            with pytest.raises(TransportError, match="timed out after 5"):
                await gw.generate("prompt")
        asyncio.run(_run())

    def test_reply_without_candidates(self):
        async def _run():
            gw = _gateway()
            resp = _ok_response()
            resp.json.return_value = {"promptFeedback": {"blockReason": "SAFETY"}}
            mock_client = AsyncMock(spec=httpx.AsyncClient)
            mock_client.post.return_value = resp
            gw._client = mock_client

            with pytest.raises(InferenceError, match="200"):
                await gw.generate("prompt")
        asyncio.run(_run())

    def test_start_and_close(self):
        async def _run():
            gw = _gateway()
            await gw.start()
            assert isinstance(gw._client, httpx.AsyncClient)
            await gw.close()
            assert gw._client is None
        asyncio.run(_run())
