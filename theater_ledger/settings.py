"""Configuration settings for Theater Ledger.

Settings are loaded from environment variables with .env file support via
pydantic-settings.

Environment variables:
    LEDGER_URL: Ledger gateway endpoint (e.g., http://localhost:8545/gateway).
        Empty selects the local filesystem backend.
    LEDGER_API_KEY: Bearer token sent to the gateway
    LEDGER_TIMEOUT: Per-request timeout in seconds
    LOCAL_STORE_PATH: Directory for the local backend
    PAGE_SIZE: Scripts per page in the collection view
    TOP_THEMES: Number of themes in the theme distribution
    WRITE_ATTEMPTS: Attempts per ledger write (1 disables retries)
    RETRY_BASE_DELAY / RETRY_MAX_DELAY: Backoff bounds in seconds
    ANALYSIS_DELAY: Simulated analysis latency in seconds

Example:
    >>> from theater_ledger.settings import settings
    >>> print(settings.page_size)
    5

Note:
    Settings are loaded once at module import and frozen.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Core configuration for the ledger client.

    Empty strings are used as defaults to allow optional services.
    Check for empty values before using service-specific settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Ledger gateway
    ledger_url: str = ""
    ledger_api_key: str = ""
    ledger_timeout: float = Field(default=30.0, gt=0)

    # Local backend
    local_store_path: str = ""

    # Collection view
    page_size: int = Field(default=5, ge=1)
    top_themes: int = Field(default=5, ge=1)

    # Write retries
    write_attempts: int = Field(default=1, ge=1)
    retry_base_delay: float = Field(default=1.0, ge=0)
    retry_max_delay: float = Field(default=10.0, ge=0)

    # Simulated analysis
    analysis_delay: float = Field(default=0.0, ge=0)


settings = Settings()
"""Global settings instance, created at module import."""
