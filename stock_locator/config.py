"""Runtime settings loaded from the environment or a .env file."""

from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from stock_locator.postcodes_client import DEFAULT_BASE_URL
from stock_locator.resolver import DEFAULT_GEOCODE_WORKERS, DEFAULT_MAX_RESULTS

DEFAULT_EXCLUDED_LOCATIONS = ("unit 22",)
DEFAULT_HTTP_TIMEOUT = 10.0


class Settings(BaseSettings):
    """Configuration for building a StockResolver and its clients."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    store_url: str = Field(default="", validation_alias="SHOPIFY_STORE_URL")
    access_token: str = Field(default="", validation_alias="SHOPIFY_ACCESS_TOKEN")
    excluded_locations: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_EXCLUDED_LOCATIONS,
        validation_alias="STOCK_LOCATOR_EXCLUDE_LOCATIONS",
        description="Name fragments of fulfilment-only locations to hide from customers.",
    )
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        gt=0,
        validation_alias="STOCK_LOCATOR_MAX_RESULTS",
    )
    geocode_workers: int = Field(
        default=DEFAULT_GEOCODE_WORKERS,
        gt=0,
        validation_alias="STOCK_LOCATOR_GEOCODE_WORKERS",
    )
    http_timeout: float = Field(
        default=DEFAULT_HTTP_TIMEOUT,
        gt=0,
        allow_inf_nan=False,
        validation_alias="STOCK_LOCATOR_HTTP_TIMEOUT",
        description="Per-request timeout in seconds for Shopify and postcodes.io.",
    )
    postcodes_io_url: str = Field(default=DEFAULT_BASE_URL, validation_alias="POSTCODES_IO_URL")

    @field_validator("excluded_locations", mode="before")
    @classmethod
    def _parse_csv(cls, value: Any) -> tuple[str, ...]:
        """Split a comma-separated environment value, dropping blanks."""
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        if isinstance(value, (list, tuple)):
            return tuple(str(item) for item in value)
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables and .env.

        Raises:
            pydantic.ValidationError: A value is malformed, e.g. a
                non-positive max results or a non-finite timeout. It is a
                ValueError subclass.
        """
        return cls()
