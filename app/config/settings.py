# app/config/settings.py

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.services.paginator import PaginationConfig


class Settings(BaseSettings):
    # Read env from the process + optionally from .env
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_invoice_engine", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Pagination
    PAGE_CAPACITY: int = Field(default=40, ge=1, validation_alias=AliasChoices("PAGE_CAPACITY", "page_capacity"))
    FOOTER_OVERFLOW_ITEM_CUTOFF: int = Field(
        default=15,
        ge=0,
        validation_alias=AliasChoices("FOOTER_OVERFLOW_ITEM_CUTOFF", "footer_overflow_item_cutoff"),
    )
    FOOTER_OVERFLOW_THRESHOLD: int = Field(
        default=300,
        ge=0,
        validation_alias=AliasChoices("FOOTER_OVERFLOW_THRESHOLD", "footer_overflow_threshold"),
    )

    # Logo / UPI QR downloads
    ASSET_FETCH_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("ASSET_FETCH_TIMEOUT", "asset_fetch_timeout"),
    )

    def pagination_config(self, capacity_per_page: int | None = None) -> PaginationConfig:
        return PaginationConfig(
            capacity_per_page=capacity_per_page or self.PAGE_CAPACITY,
            footer_overflow_threshold=self.FOOTER_OVERFLOW_THRESHOLD,
            footer_overflow_item_cutoff=self.FOOTER_OVERFLOW_ITEM_CUTOFF,
        )


settings = Settings()
