"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nft_indexer.config.constants import (
    DEFAULT_CONTRACT_ADDRESS,
    DEFAULT_START_BLOCK,
    RPC_MAX_CONCURRENT,
    RPC_TIMEOUT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Blockchain RPC (must serve historical eth_call for tokenURI)
    rpc_url: str

    # Watched contract
    contract_address: str = Field(
        default=DEFAULT_CONTRACT_ADDRESS,
        description="ERC-721 contract whose Transfer events are indexed"
    )
    start_block: int = Field(
        default=DEFAULT_START_BLOCK,
        ge=0,
        description="First block to index when no checkpoint exists"
    )
    end_block: int | None = Field(
        default=None,
        ge=0,
        description="Optional last block; the pipeline stops after it"
    )

    # Batching / polling
    batch_blocks: int = Field(
        default=2000,
        gt=0,
        description="Blocks per eth_getLogs range (one batch per range)"
    )
    confirmations: int = Field(
        default=6,
        ge=0,
        description="Blocks behind head treated as final"
    )
    poll_interval: int = Field(
        default=3, ge=1, description="Head polling interval in seconds"
    )

    # Outbound request limits
    metadata_concurrency: int = Field(
        default=RPC_MAX_CONCURRENT,
        gt=0,
        description="Maximum in-flight tokenURI calls per batch"
    )
    header_concurrency: int = Field(
        default=RPC_MAX_CONCURRENT,
        gt=0,
        description="Maximum in-flight block header fetches"
    )
    rpc_timeout: float = Field(default=RPC_TIMEOUT, gt=0)
    rpc_max_retries: int = Field(default=3, ge=1)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = "logs/indexer.log"

    # Environment
    environment: str = "development"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_block_range(self) -> 'Settings':
        """Ensure the configured block range is not empty."""
        if self.end_block is not None and self.end_block < self.start_block:
            raise ValueError(
                f'END_BLOCK ({self.end_block}) must not be lower than '
                f'START_BLOCK ({self.start_block}).'
            )
        return self

    @model_validator(mode='after')
    def validate_production(self) -> 'Settings':
        """Validate production-specific requirements."""
        if self.environment == 'production':
            if self.debug:
                raise ValueError(
                    'DEBUG must be False in production environment. '
                    'Set DEBUG=false in your .env file.'
                )
            if self.confirmations == 0:
                logger.warning(
                    'CONFIRMATIONS=0 in production: blocks at the chain head '
                    'are indexed immediately and reorgs are not handled.'
                )
        return self

    @field_validator('contract_address')
    @classmethod
    def validate_eth_address(cls, v: str) -> str:
        """Validate Ethereum address format."""
        if not v.startswith('0x') or len(v) != 42:
            raise ValueError(
                f'Invalid Ethereum address: {v}. '
                'Must start with 0x and be 42 characters long.'
            )
        try:
            int(v[2:], 16)
        except ValueError as exc:
            raise ValueError(f'Invalid Ethereum address format: {v}') from exc
        return v.lower()

    @field_validator('log_file')
    @classmethod
    def empty_log_file_disables(cls, v: str | None) -> str | None:
        """Treat an empty LOG_FILE as 'no file sink'."""
        return v or None


settings = Settings()
