from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.ports.appointment_repository import AppointmentRepositoryPort
from app.application.ports.ledger_repository import LedgerRepositoryPort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.use_cases.appointment_store import AppointmentStore
from app.application.use_cases.ledger_projector import LedgerProjector
from app.application.use_cases.lifecycle import AppointmentLifecycle
from app.application.use_cases.send_notification import SendNotificationUseCase
from app.core.config import Settings, settings
from app.infrastructure.catalog.pricing_catalog import PricingCatalog
from app.infrastructure.notifications.queue_dispatcher import QueueNotificationDispatcher
from app.infrastructure.store.json_store import JsonAppointmentRepository, JsonLedgerRepository
from app.infrastructure.store.memory_store import MemoryAppointmentRepository, MemoryLedgerRepository
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from app.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform


logger = logging.getLogger(__name__)


@dataclass
class Container:
    catalog: PricingCatalog
    appointments: AppointmentRepositoryPort
    ledger: LedgerRepositoryPort
    platform: MessagePlatformPort
    dispatcher: QueueNotificationDispatcher
    lifecycle: AppointmentLifecycle


_container: Container | None = None


def build_repositories(config: Settings) -> tuple[AppointmentRepositoryPort, LedgerRepositoryPort]:
    provider = (config.STORE_PROVIDER or "").lower()
    if not provider:
        provider = "memory" if config.ENV.lower() == "test" else "json"
    if provider == "json":
        return JsonAppointmentRepository(config.DATA_DIR), JsonLedgerRepository(config.DATA_DIR)
    if provider == "memory":
        return MemoryAppointmentRepository(), MemoryLedgerRepository()
    raise ValueError(f"Unknown STORE_PROVIDER: {config.STORE_PROVIDER}")


def build_message_platform(config: Settings) -> MessagePlatformPort:
    logger.info(
        "WHATSAPP_API_KEY present=%s len=%s",
        bool(config.WHATSAPP_API_KEY),
        len(config.WHATSAPP_API_KEY or ""),
    )

    if not config.WHATSAPP_API_URL or not config.WHATSAPP_API_KEY:
        if config.ENV.lower() in {"dev", "local", "test"}:
            logger.info("Using MockWhatsAppPlatform (gateway not configured, ENV=%s)", config.ENV)
            return MockWhatsAppPlatform()
        raise ValueError("WHATSAPP_API_URL and WHATSAPP_API_KEY are required to send notifications.")

    logger.info("Using real WhatsAppPlatform")
    client = WhatsAppClient(
        api_url=config.WHATSAPP_API_URL,
        api_key=config.WHATSAPP_API_KEY,
        timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
    )
    return WhatsAppPlatform(client=client)


def build_container(
    config: Settings,
    platform: MessagePlatformPort | None = None,
    appointments: AppointmentRepositoryPort | None = None,
    ledger: LedgerRepositoryPort | None = None,
) -> Container:
    if appointments is None or ledger is None:
        appointments, ledger = build_repositories(config)
    catalog = PricingCatalog()
    projector = LedgerProjector(ledger)
    store = AppointmentStore(repository=appointments, catalog=catalog, projector=projector)

    if platform is None:
        platform = build_message_platform(config)
    sender = SendNotificationUseCase(
        platform=platform,
        appointments=appointments,
        catalog=catalog,
        enabled=config.NOTIFICATIONS_ENABLED,
        business_name=config.BUSINESS_NAME,
        country_code=config.WHATSAPP_DEFAULT_COUNTRY_CODE,
        currency=config.CURRENCY_SYMBOL,
    )
    dispatcher = QueueNotificationDispatcher(
        handler=sender.execute,
        maxsize=config.NOTIFICATION_QUEUE_SIZE,
        workers=config.NOTIFICATION_WORKERS,
    )
    lifecycle = AppointmentLifecycle(store=store, projector=projector, dispatcher=dispatcher)
    return Container(
        catalog=catalog,
        appointments=appointments,
        ledger=ledger,
        platform=platform,
        dispatcher=dispatcher,
        lifecycle=lifecycle,
    )


def get_container() -> Container:
    global _container
    if _container is None:
        _container = build_container(settings)
    return _container


def set_container(container: Container | None) -> None:
    global _container
    _container = container


def get_lifecycle() -> AppointmentLifecycle:
    return get_container().lifecycle


def get_catalog() -> PricingCatalog:
    return get_container().catalog
