from __future__ import annotations

import dataclasses
import logging

from app.application.ports.appointment_repository import AppointmentRepositoryPort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.utils.message_templates import format_whatsapp_number, render_message
from app.domain.entities.notification import NotificationIntent


class SendNotificationUseCase:
    def __init__(
        self,
        platform: MessagePlatformPort,
        appointments: AppointmentRepositoryPort,
        catalog: PricingCatalogPort,
        enabled: bool = True,
        business_name: str = "",
        country_code: str = "55",
        currency: str = "R$",
    ) -> None:
        self._platform = platform
        self._appointments = appointments
        self._catalog = catalog
        self._enabled = enabled
        self._business_name = business_name
        self._country_code = country_code
        self._currency = currency
        self._logger = logging.getLogger(__name__)

    def execute(self, intent: NotificationIntent) -> bool:
        """
        Deliver one notification. Returns True if actually sent, False if skipped.
        Raises DispatchFailure when the platform rejects the message.
        """
        appointment = intent.appointment
        contact = appointment.contact_channel
        if not contact:
            self._logger.info(
                "No contact channel, skipping notification",
                extra={"appointment_id": appointment.id, "kind": intent.kind.value},
            )
            return False

        entry = self._catalog.get_service(appointment.service_kind.value)
        service_name = entry.display_name if entry else appointment.service_kind.value
        text = render_message(
            intent.kind,
            appointment,
            service_name=service_name,
            business_name=self._business_name,
            currency=self._currency,
        )

        if not self._enabled:
            self._logger.info(
                "WOULD_SEND_NOTIFICATION",
                extra={"appointment_id": appointment.id, "kind": intent.kind.value},
            )
            self._logger.info("NOTIFICATIONS_ENABLED=false -> skipping send")
            return False

        recipient = format_whatsapp_number(contact, self._country_code)
        self._platform.send_text(recipient_id=recipient, text=text)

        marked = self._appointments.modify(
            appointment.id,
            lambda current: dataclasses.replace(current, notification_sent=True),
        )
        if marked is None:
            self._logger.info(
                "Notification sent for deleted appointment",
                extra={"appointment_id": appointment.id, "kind": intent.kind.value},
            )
        else:
            self._logger.info(
                "Notification sent",
                extra={"appointment_id": appointment.id, "kind": intent.kind.value},
            )
        return True
