"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class BankAccountConfig(BaseSettings):
    """Bank account configuration"""

    # Business rules configuration
    max_daily_withdrawal_amount: int = 100
    max_daily_withdrawal_count: int = 3
    ledger_aggregation_threshold: int = 50  # Most recent entries kept unaggregated

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    class Config:
        env_prefix = "BANK_ACCOUNT_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BankAccountConfig()


def get_config() -> BankAccountConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankAccountConfig:
    """Reload configuration from environment"""
    global config
    config = BankAccountConfig()
    return config
