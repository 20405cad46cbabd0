from datetime import date

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Logistic Intel Shipment Enrichment"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Logistic Intel gateway
    GATEWAY_BASE_URL: str = "https://lit-gw-2e68g4k3.uc.gateway.dev"
    GATEWAY_API_KEY: str = ""
    GATEWAY_TIMEOUT_SECONDS: float = 30.0

    # Redis (persisted cache tier). Empty string keeps everything in-process.
    REDIS_URL: str = "redis://localhost:6379/0"

    # Cache settings
    CACHE_TTL_DAYS: int = 30
    CACHE_NAMESPACE: str = "lit_enriched_"

    # Fetch sizes
    ENRICHMENT_BOL_LIMIT: int = 500
    KPI_BOL_LIMIT: int = 100
    KPI_HISTORY_START: date = date(2019, 1, 1)

    # Batch settings
    BATCH_DELAY_SECONDS: float = 0.1

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
