from abc import ABC, abstractmethod


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_text(self, recipient_id: str, text: str) -> None:
        """Deliver a text message. Raises DispatchFailure on failure."""
        raise NotImplementedError

    def close(self) -> None:
        """Release transport resources. Called once on shutdown."""
        return None
