"""
Configuration Management Module

This module handles loading, validating, and providing access to application configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Validates all required settings
- Provides type-safe access to configuration values
- Converts comma-separated strings to lists (instrument symbols, CORS origins)
- Handles optional settings with sensible defaults

Usage:
    from core.config import settings

    # Access configuration values
    print(settings.quote_page_base_url)
    print(settings.domestic_equities_list)  # Returns a list of strings
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


def _split_symbols(raw: str) -> List[str]:
    return [s.strip().upper() for s in raw.split(",") if s.strip()]


class Settings(BaseSettings):
    """
    Application Settings

    This class defines all configuration parameters for the application.
    Values are automatically loaded from environment variables or .env file.

    Attributes:
        quote_page_base_url: Base URL of the finance quote pages that are scraped
        quote_page_language: Language requested from the quote pages (drives number format)
        quotes_api_base_url: Base URL for the quotes API (previous session close)
        brapi_token: Access token for the quotes API
        policy_rate_url: Statistics API endpoint returning the latest policy rate
        request_timeout: Timeout for every outbound HTTP request in seconds
        refresh_interval_seconds: Wall-clock interval between refresh passes
        pacing_min_seconds / pacing_max_seconds: Bounds of the pause after each symbol
        pair_refresh_min_age_seconds: Minimum age of a currency/crypto record before refetching
        change_clamp_percent: Absolute bound for any reported change percentage
        domestic_equities / real_estate_funds / foreign_etfs: Instrument lists
        app_host / app_port: Server bind address
        environment: Current environment (development, production)
        debug: Enable debug mode with verbose logging
        log_level: Logging level
        cors_origins: Comma-separated list of allowed CORS origins
    """

    # ============================================
    # Upstream Sources
    # ============================================

    quote_page_base_url: str = Field(
        default="https://www.google.com/finance",
        description="Finance quote page base URL (scraped for current prices)"
    )

    quote_page_language: str = Field(
        default="pt-BR",
        description="Language requested from the quote page"
    )

    quotes_api_base_url: str = Field(
        default="https://brapi.dev/api",
        description="Quotes API base URL (previous session close)"
    )

    brapi_token: str = Field(
        default="",
        description="Quotes API access token"
    )

    policy_rate_url: str = Field(
        default="https://api.bcb.gov.br/dados/serie/bcdata.sgs.432/dados/ultimos/1?formato=json",
        description="Statistics API endpoint for the latest SELIC observation"
    )

    request_timeout: int = Field(
        default=10,
        description="HTTP request timeout in seconds"
    )

    # ============================================
    # Refresh Cadence & Pacing
    # ============================================

    refresh_interval_seconds: int = Field(
        default=180,
        description="Interval between refresh passes (seconds)"
    )

    pacing_min_seconds: float = Field(
        default=0.4,
        description="Minimum pause after each symbol within a pass (seconds)"
    )

    pacing_max_seconds: float = Field(
        default=0.5,
        description="Maximum pause after each symbol within a pass (seconds)"
    )

    pair_refresh_min_age_seconds: int = Field(
        default=600,
        description="Minimum age of a currency/crypto pair record before it is refetched"
    )

    change_clamp_percent: float = Field(
        default=50.0,
        description="Absolute bound applied to every change percentage"
    )

    # ============================================
    # Instrument Universe
    # ============================================

    domestic_equities: str = Field(
        default="ITSA4,RAPT4,EGIE3,SAPR11,TAEE11,HYPE3,INTB3,WEGE3,PSSA3,BRSR6,CAML3,HAPV3",
        description="Comma-separated list of Brazilian equities"
    )

    real_estate_funds: str = Field(
        default="XPLG11,KNRI11,HGLG11,KNIP11,IRDM11,HGRU11,HGRE11,MXRF11",
        description="Comma-separated list of Brazilian real-estate funds"
    )

    foreign_etfs: str = Field(
        default="IVV,BIL,SCHD",
        description="Comma-separated list of US ETFs"
    )

    # ============================================
    # Application Configuration
    # ============================================

    app_host: str = Field(
        default="0.0.0.0",
        description="FastAPI server host address"
    )

    app_port: int = Field(
        default=3000,
        description="FastAPI server port"
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, production)"
    )

    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    # ============================================
    # Custom Properties
    # ============================================

    @property
    def domestic_equities_list(self) -> List[str]:
        """
        Convert comma-separated equities string to a list.

        Example:
            >>> settings.domestic_equities_list[:3]
            ['ITSA4', 'RAPT4', 'EGIE3']
        """
        return _split_symbols(self.domestic_equities)

    @property
    def real_estate_funds_list(self) -> List[str]:
        """Convert comma-separated real-estate funds string to a list."""
        return _split_symbols(self.real_estate_funds)

    @property
    def foreign_etfs_list(self) -> List[str]:
        """Convert comma-separated ETFs string to a list."""
        return _split_symbols(self.foreign_etfs)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Convert comma-separated CORS origins string to a list.

        Example:
            >>> settings.cors_origins_list
            ['http://localhost:3000', 'http://localhost:5173']
        """
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def pacing_bounds(self) -> tuple:
        """(min, max) pause in seconds applied after each symbol."""
        return (self.pacing_min_seconds, self.pacing_max_seconds)


# ============================================
# Global Settings Instance
# ============================================

# Create a single instance of settings to be imported throughout the application
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration(config: Settings = None) -> None:
    """
    Validate critical configuration settings on application startup.

    Args:
        config: Settings to validate (defaults to the global instance)

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Import logger here to avoid circular import
    # (logging.py imports config.py, so we can't import at module level)
    from core.logging import logger
    from core.universe import GENERAL_SYMBOLS, build_universe

    if config is None:
        config = settings

    groups = {
        "DOMESTIC_EQUITIES": config.domestic_equities_list,
        "REAL_ESTATE_FUNDS": config.real_estate_funds_list,
        "FOREIGN_ETFS": config.foreign_etfs_list,
    }

    seen = {symbol: "GENERAL" for symbol in GENERAL_SYMBOLS}
    for env_name, symbols in groups.items():
        if not symbols:
            raise ValueError(f"{env_name} must contain at least one symbol")
        for symbol in symbols:
            if symbol in seen:
                raise ValueError(
                    f"Symbol '{symbol}' is listed in both {seen[symbol]} and {env_name}. "
                    f"Instrument categories must be disjoint"
                )
            seen[symbol] = env_name

    if config.refresh_interval_seconds <= 0:
        raise ValueError(
            f"Invalid REFRESH_INTERVAL_SECONDS: {config.refresh_interval_seconds}. Must be positive"
        )

    if config.pacing_min_seconds < 0 or config.pacing_max_seconds < config.pacing_min_seconds:
        raise ValueError(
            f"Invalid pacing bounds: {config.pacing_min_seconds}..{config.pacing_max_seconds}. "
            f"Require 0 <= PACING_MIN_SECONDS <= PACING_MAX_SECONDS"
        )

    if config.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {config.request_timeout}. Must be positive")

    if config.change_clamp_percent <= 0:
        raise ValueError(
            f"Invalid CHANGE_CLAMP_PERCENT: {config.change_clamp_percent}. Must be positive"
        )

    # Validate port number
    if not (1 <= config.app_port <= 65535):
        raise ValueError(f"Invalid port number: {config.app_port}. Must be between 1 and 65535")

    # Validate log level
    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    if not config.brapi_token:
        logger.warning("BRAPI_TOKEN is not set; previous-close lookups may be rejected")

    # Log successful validation
    logger.info("Configuration validated successfully")
    logger.info(f"Tracking {len(build_universe(config))} instruments")
    logger.info(f"Refresh interval: {config.refresh_interval_seconds}s "
                f"(pacing {config.pacing_min_seconds}-{config.pacing_max_seconds}s per symbol)")
    logger.info(f"Server: {config.app_host}:{config.app_port}")
    logger.info(f"Log level: {config.log_level.upper()}")
