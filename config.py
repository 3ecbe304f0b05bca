import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Trip Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./trips.db"

    # Invoices
    PUBLIC_DIR: str = os.path.join(BASE_DIR, "public")
    PUBLIC_MOUNT: str = "public"
    PUBLIC_BASE_URL: str = "http://127.0.0.1:8000"
    INVOICE_TEMPLATE: str = os.path.join(BASE_DIR, "templates", "bill.html")
    BROWSER_HEADLESS: bool = True

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
