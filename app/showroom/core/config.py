from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "SHOWROOM-HUB"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720
    DATABASE_URL: str = "sqlite+pysqlite:///./showroom.db"
    DATABASE_ECHO: bool = False
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "change-me"
    SALE_MAX_INSTALLMENT_MONTHS: int | None = 60
    SOLD_VEHICLE_POLICY: Literal["stock_out", "delete"] = "stock_out"
    PARTNER_CNIC_PLACEHOLDER: str = "00000-0000000-0"
    VEHICLE_LIST_DEFAULT_LIMIT: int = 100
    VEHICLE_LIST_MAX_LIMIT: int = 500
    OPS_ENABLE_INTEGRITY_SCAN: bool = True
    METRICS_ENABLED: bool = True

settings = Settings()
