class SchedulingError(RuntimeError):
    """Base class for errors reported synchronously to scheduling callers."""
    pass


class AppointmentNotFoundError(SchedulingError):
    """Raised when an appointment id does not resolve in the store."""

    def __init__(self, appointment_id: str) -> None:
        super().__init__(f"Appointment not found: {appointment_id}")
        self.appointment_id = appointment_id


class ValidationError(SchedulingError):
    """Raised when booking fields are present but malformed."""
    pass


class MissingFieldError(ValidationError):
    """Raised when required booking fields are absent or blank."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__("Missing required fields: " + ", ".join(fields))
        self.fields = fields


class InvalidServiceError(SchedulingError):
    """Raised when a service kind is not in the pricing catalog."""

    def __init__(self, service_kind: str) -> None:
        super().__init__(f"Unknown service: {service_kind}")
        self.service_kind = service_kind


class InvalidTransitionError(SchedulingError):
    """Raised when a status change is not permitted from the current status."""

    def __init__(self, appointment_id: str, current: str, requested: str) -> None:
        super().__init__(f"Cannot move appointment {appointment_id} from {current} to {requested}")
        self.appointment_id = appointment_id
        self.current = current
        self.requested = requested


class DispatchFailure(RuntimeError):
    """Raised when the messaging provider is unreachable or rejects a message.

    Never propagated to scheduling callers; the notification worker logs it.
    """
    pass


class CorruptedStoreError(RuntimeError):
    """Raised when a persisted collection cannot be parsed.

    The file is left untouched and no write is attempted until it is repaired.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unreadable store file {path}: {reason}")
        self.path = path
        self.reason = reason
