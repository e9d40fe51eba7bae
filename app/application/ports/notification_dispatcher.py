from abc import ABC, abstractmethod

from app.domain.entities.notification import NotificationIntent


class NotificationDispatcherPort(ABC):
    @abstractmethod
    def enqueue(self, intent: NotificationIntent) -> None:
        """
        Hand a notification intent to the delivery side.
        Must not block on delivery and must not raise on delivery failure.
        """
        raise NotImplementedError
