from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Your Barbershop"
    CURRENCY_SYMBOL: str = "R$"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str | None = None  # "json" or "memory"; ENV decides when unset
    DATA_DIR: str = "./data"

    WHATSAPP_API_URL: str | None = None
    WHATSAPP_API_KEY: str | None = None
    WHATSAPP_DEFAULT_COUNTRY_CODE: str = "55"

    NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_QUEUE_SIZE: int = 100
    NOTIFICATION_WORKERS: int = 1
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
