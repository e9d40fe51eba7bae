from __future__ import annotations

import logging

import httpx

from app.application.exceptions import DispatchFailure


class WhatsAppClient:
    """Client for an Evolution-API style WhatsApp gateway."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_text(self, number: str, text: str) -> str | None:
        """Send a text message. Returns the provider message id when present."""
        url = f"{self._api_url}/message/sendText/{self._api_key}"
        payload = {"number": number, "text": text}
        headers = {"apikey": self._api_key}
        try:
            resp = self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("WhatsApp gateway unreachable", extra={"error": str(e)})
            raise DispatchFailure(f"WhatsApp gateway unreachable: {e}") from e

        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("error") or resp.text
            except Exception:
                error_message = resp.text
            self._logger.error(
                "WhatsApp send failed",
                extra={
                    "status": resp.status_code,
                    "error": error_message,
                    "text_length": len(text),
                },
            )
            raise DispatchFailure(f"WhatsApp send failed ({resp.status_code}): {error_message}")

        try:
            data = resp.json()
        except ValueError:
            return None
        return (data.get("key") or {}).get("id") or data.get("messageId")

    def close(self) -> None:
        self._client.close()
