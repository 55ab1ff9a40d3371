from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class EmailDeliveryError(RuntimeError):
    """The email provider rejected the message or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, detail: object = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class EmailSender:
    """Thin proxy to the Resend transactional email API."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        api_url: str = RESEND_API_URL,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds))

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def send(self, to: str | list[str], subject: str, html: str) -> dict:
        """Send one message; returns the provider's reply (contains the message id)."""
        if not self._api_key:
            raise EmailDeliveryError("Email provider API key is not configured")
        if not self._client:
            await self.start()

        try:
            resp = await self._client.post(  # type: ignore[union-attr]
                self.api_url,
                json={"from": self.sender, "to": to, "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.RequestError as e:
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {"message": resp.text[:300]}

        if not resp.is_success:
            logger.error("Email send to %s failed with %d", to, resp.status_code)
            raise EmailDeliveryError(
                f"Email provider returned {resp.status_code}",
                status_code=resp.status_code,
                detail=data,
            )

        logger.info("Email sent to %s: %s", to, data.get("id"))
        return data

    @classmethod
    def from_config(cls, config) -> EmailSender:
        return cls(api_key=config.resend_api_key, sender=config.email_from)
