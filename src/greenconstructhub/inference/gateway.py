from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """The generative-language endpoint answered with a non-success status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Inference API error: {status_code}")


class TransportError(RuntimeError):
    """The generative-language endpoint could not be reached."""


@dataclass
class InferenceResponse:
    content: str
    model: str
    latency_ms: int
    finish_reason: str = "STOP"
    token_usage: dict = field(default_factory=dict)


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 2048

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


@dataclass(frozen=True)
class ProviderConfig:
    base_url: str
    api_key: str
    model: str
    timeout_seconds: float = 30.0
    generation: GenerationConfig = field(default_factory=GenerationConfig)


class InferenceGateway:
    """Client for a Gemini-style ``generateContent`` endpoint.

    One attempt per call, no retries. Non-2xx replies raise InferenceError
    carrying the status code; network failures and timeouts raise
    TransportError.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout_seconds))

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def url(self) -> str:
        return f"{self.config.base_url}/models/{self.config.model}:generateContent"

    def build_body(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self.config.generation.to_dict(),
        }

    async def generate(self, prompt: str) -> InferenceResponse:
        """Send a single prompt and return the first candidate's text."""
        if not self._client:
            await self.start()

        start_time = time.monotonic()
        try:
            response = await self._client.post(  # type: ignore[union-attr]
                self.url,
                params={"key": self.config.api_key},
                json=self.build_body(prompt),
                headers={"Content-Type": "application/json"},
                timeout=self.config.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Inference API timed out after {self.config.timeout_seconds}s"
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Inference API unreachable: {e}") from e

        latency_ms = int((time.monotonic() - start_time) * 1000)

        if not response.is_success:
            detail = response.text[:300]
            logger.error("Inference API error %d: %s", response.status_code, detail)
            raise InferenceError(response.status_code, detail)

        data = response.json()
        logger.info("Inference response received in %dms", latency_ms)

        try:
            candidate = data["candidates"][0]
            parts = candidate["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise InferenceError(response.status_code, "Reply contained no candidates") from e

        usage = data.get("usageMetadata", {})
        return InferenceResponse(
            content="".join(p.get("text", "") for p in parts),
            model=data.get("modelVersion", self.config.model),
            latency_ms=latency_ms,
            finish_reason=candidate.get("finishReason", "STOP"),
            token_usage={
                "prompt_tokens": usage.get("promptTokenCount", 0),
                "completion_tokens": usage.get("candidatesTokenCount", 0),
                "total_tokens": usage.get("totalTokenCount", 0),
            },
        )

    @classmethod
    def from_config(cls, config) -> InferenceGateway:
        """Create gateway from AppConfig."""
        return cls(
            ProviderConfig(
                base_url=config.gemini_base_url,
                api_key=config.gemini_api_key,
                model=config.gemini_model,
                timeout_seconds=config.inference_timeout_seconds,
            )
        )
