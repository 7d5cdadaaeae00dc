"""Application configuration"""

from typing import List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BLOCKFROST_URL_TEMPLATE = "https://cardano-{network}.blockfrost.io/api/v0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Built once at process start and passed explicitly to the app factory,
    the Blockfrost client and the aggregators. Instances are immutable.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Blockfrost
    blockfrost_api_key: Optional[str] = None
    blockfrost_network: Literal["mainnet", "preprod", "preview"] = "mainnet"
    blockfrost_base_url: Optional[str] = None  # Overrides the network URL when set
    blockfrost_timeout: float = 10.0  # Transport timeout per upstream call

    # Execution mode: controls log verbosity and stack trace exposure
    environment: Literal["development", "production", "test"] = "production"

    # Request handling
    request_timeout: float = 15.0  # Whole aggregator call, not just the transport
    slow_request_threshold: float = 5.0

    # API
    api_title: str = "Cardano Explorer API"
    api_version: str = "0.1.0"

    # CORS
    cors_origins: List[str] = ["*"]

    # Logging (defaults from environment when unset)
    log_level: Optional[str] = None

    @field_validator("blockfrost_api_key", mode="before")
    @classmethod
    def _strip_api_key(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def base_url(self) -> str:
        if self.blockfrost_base_url:
            return self.blockfrost_base_url.rstrip("/")
        return BLOCKFROST_URL_TEMPLATE.format(network=self.blockfrost_network)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.is_development else "INFO"
