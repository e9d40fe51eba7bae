from __future__ import annotations

from app.application.ports.message_platform import MessagePlatformPort
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


class WhatsAppPlatform(MessagePlatformPort):
    def __init__(self, client: WhatsAppClient) -> None:
        self._client = client

    def send_text(self, recipient_id: str, text: str) -> None:
        self._client.send_text(number=recipient_id, text=text)

    def close(self) -> None:
        self._client.close()
