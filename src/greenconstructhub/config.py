from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

from dotenv import load_dotenv

# Env var name for each AppConfig field that holds a secret or address.
_ENV_NAMES = {
    "gemini_api_key": "GEMINI_API_KEY",
    "resend_api_key": "RESEND_API_KEY",
    "email_from": "EMAIL_FROM",
}


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class AppConfig:
    gemini_api_key: str
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    inference_timeout_seconds: float = 30.0
    resend_api_key: str = ""
    email_from: str = ""
    host: str = "0.0.0.0"
    port: int = 8000

    def missing(self, *required: str) -> list[str]:
        """Return env var names for the required fields that are empty."""
        known = {f.name for f in fields(self)}
        out = []
        for name in required:
            if name not in known:
                raise ValueError(f"Unknown config field: {name}")
            if not getattr(self, name):
                out.append(_ENV_NAMES.get(name, name.upper()))
        return out

    def validate(self, *required: str) -> AppConfig:
        """Raise ConfigError if any of the required fields are empty.

        Defaults to the inference key, which the forecast endpoint cannot
        run without.
        """
        missing = self.missing(*(required or ("gemini_api_key",)))
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")
        return self


def load_config() -> AppConfig:
    """Load application config from environment variables.

    Loads .env file if present in the current directory.
    """
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    try:
        return AppConfig(
            gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-1.5-flash-latest"),
            gemini_base_url=os.environ.get(
                "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
            ).rstrip("/"),
            inference_timeout_seconds=float(os.environ.get("INFERENCE_TIMEOUT_SECONDS", "30")),
            resend_api_key=os.environ.get("RESEND_API_KEY", ""),
            email_from=os.environ.get("EMAIL_FROM", ""),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "8000")),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e
