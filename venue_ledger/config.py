"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from venue_ledger.domain.models import LedgerLimits


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./venue_ledger.db"

    # Service
    service_name: str = "venue-ledger"
    log_level: str = "INFO"
    timezone: str = "Europe/Copenhagen"  # Daily deposit total resets at local midnight

    # Ledger rules (minor units)
    daily_deposit_limit: int = 10_000
    max_deposited_balance: int = 50_000
    multiplier_factor: int = 3

    # Sessions
    secret_key: str = "change-me-in-production"
    token_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    admin_username: str = "admin"
    admin_password_hash: str = ""  # bcrypt hash; empty disables admin login

    # Payout notifications
    payout_webhook_url: str = "http://localhost:8002/mock-payout"
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # API
    history_limit: int = 20

    def ledger_limits(self) -> LedgerLimits:
        return LedgerLimits(
            daily_deposit_limit=self.daily_deposit_limit,
            max_deposited_balance=self.max_deposited_balance,
            multiplier_factor=self.multiplier_factor,
        )


settings = Settings()
