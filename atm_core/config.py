"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AtmConfig(BaseSettings):
    """ATM transaction processor configuration"""

    model_config = SettingsConfigDict(
        env_prefix="ATM_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Receipt rendering
    currency_symbol: str = "zł"

    # Feature flags
    enable_audit_logging: bool = True

    # Demo account used by `python -m atm_core`
    demo_name: str = "Raman Kozar"
    demo_card_id: str = "4409 7788 9321 8700"
    demo_pin: int = 5678
    demo_phone_number: str = "+48567897464"
    demo_cash_balance: Decimal = Decimal("500.00")
    demo_deposit_balance: Decimal = Decimal("1000.00")
    demo_phone_balance: Decimal = Decimal("13.25")
    demo_card_balance: Decimal = Decimal("300.00")


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
