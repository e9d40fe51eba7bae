from __future__ import annotations

import logging
import queue
import threading
from typing import Callable

from app.application.exceptions import DispatchFailure
from app.application.ports.notification_dispatcher import NotificationDispatcherPort
from app.domain.entities.notification import NotificationIntent


_STOP = object()


class QueueNotificationDispatcher(NotificationDispatcherPort):
    """
    Bounded work queue drained by background worker threads.

    enqueue() never blocks: when the queue is full the intent is dropped and
    logged. Each intent gets a single delivery attempt.
    """

    def __init__(
        self,
        handler: Callable[[NotificationIntent], bool],
        maxsize: int = 100,
        workers: int = 1,
    ) -> None:
        self._handler = handler
        self._queue: queue.Queue[object] = queue.Queue(maxsize=maxsize)
        self._worker_count = max(1, workers)
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._threads = [
                threading.Thread(target=self._run, name=f"notification-worker-{i}", daemon=True)
                for i in range(self._worker_count)
            ]
            for thread in self._threads:
                thread.start()
        self._logger.info("Notification workers started", extra={"reason": f"workers={self._worker_count}"})

    def stop(self, timeout: float | None = 5.0) -> None:
        with self._lock:
            threads = list(self._threads)
            for _ in threads:
                self._queue.put(_STOP)
        for thread in threads:
            thread.join(timeout)
        with self._lock:
            self._threads = []

    def join(self) -> None:
        """Block until every queued intent has been processed."""
        self._queue.join()

    def enqueue(self, intent: NotificationIntent) -> None:
        try:
            self._queue.put_nowait(intent)
        except queue.Full:
            self._logger.warning(
                "Notification queue full, dropping intent",
                extra={"appointment_id": intent.appointment_id, "kind": intent.kind.value},
            )
            return
        self._logger.info(
            "Notification queued",
            extra={"appointment_id": intent.appointment_id, "kind": intent.kind.value},
        )

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._deliver(item)  # type: ignore[arg-type]
            finally:
                self._queue.task_done()

    def _deliver(self, intent: NotificationIntent) -> None:
        try:
            self._handler(intent)
        except DispatchFailure as e:
            self._logger.error(
                "Notification dispatch failed",
                extra={"appointment_id": intent.appointment_id, "kind": intent.kind.value, "error": str(e)},
            )
        except Exception as e:
            self._logger.exception(
                "Unexpected error delivering notification",
                extra={"appointment_id": intent.appointment_id, "kind": intent.kind.value, "error": str(e)},
            )
