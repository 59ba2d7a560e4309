from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "shipweight"
    version: str = "1.2.0"
    DEBUG: bool = False
    APP_DATABASE_DSN: str = "sqlite:////tmp/shipweight.db"
    REDIS_URL: str = "redis://localhost:6379"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Orders
    DEFAULT_CURRENCY: str = "GBP"

    # Shipping by weight
    SHIPPING_DEBUG: bool = False  # verbose calculation diagnostics
    SHIPPING_WORKER_ENABLED: bool = False  # queue recalculations on arq instead of inline


settings = Settings()
