from __future__ import annotations

import logging
from collections import deque

from app.application.ports.message_platform import MessagePlatformPort


class MockWhatsAppPlatform(MessagePlatformPort):
    """Logs instead of sending. Keeps only the most recent messages in `sent`."""

    def __init__(self, history: int = 100) -> None:
        self.sent: deque[tuple[str, str]] = deque(maxlen=history)
        self._logger = logging.getLogger(__name__)

    def send_text(self, recipient_id: str, text: str) -> None:
        self.sent.append((recipient_id, text))
        self._logger.info(
            "Mock send to WhatsApp", extra={"recipient_id": recipient_id, "text": text}
        )
