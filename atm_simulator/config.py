"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal
from typing import Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .currency import DEFAULT_BASE_CURRENCY, DEFAULT_RATES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AtmConfig(BaseSettings):
    """ATM simulator configuration"""

    model_config = SettingsConfigDict(
        env_prefix="ATM_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Account opened at process start
    pin: int = 1234
    opening_balance: Decimal = Decimal("1000.00")
    base_currency: str = DEFAULT_BASE_CURRENCY

    # Static rate table, ATM_RATES='{"USD": "1.0", "EUR": "0.93"}'
    rates: Dict[str, Decimal] = Field(default_factory=lambda: dict(DEFAULT_RATES))

    # Business rules
    max_transaction_amount: Decimal = Decimal("10000.00")

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text

    @field_validator("base_currency")
    @classmethod
    def upper_code(cls, value: str) -> str:
        return value.upper()

    @field_validator("max_transaction_amount")
    @classmethod
    def positive_limit(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError("max_transaction_amount must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value


# Global configuration instance
config = AtmConfig()


def get_config() -> AtmConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AtmConfig:
    """Reload configuration from environment"""
    global config
    config = AtmConfig()
    return config
