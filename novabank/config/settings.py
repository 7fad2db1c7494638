"""
Configuration Management for NovaBank

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The Gemini key is optional at load time: a missing key only matters when
someone actually asks the advisor a question, and that is reported there
as a configuration error.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Gemini LLM configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
        description="Gemini API key"
    )
    model_name: str = Field(
        default="gemini-3-flash-preview",
        description="Gemini model to use"
    )
    max_tokens: int = Field(
        default=2048,
        ge=100,
        le=8192,
        description="Maximum tokens in response"
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Model temperature (higher = more varied phrasing)"
    )
    
    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


class BankingSettings(BaseSettings):
    """Account store and persistence configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="NOVA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    seed_balance: Decimal = Field(
        default=Decimal("12450.00"),
        description="Balance used when nothing has been persisted yet"
    )
    transfer_delay_seconds: float = Field(
        default=1.8,
        ge=0.0,
        le=30.0,
        description="Simulated processing latency for a transfer"
    )
    serialize_transfers: bool = Field(
        default=False,
        description="Queue concurrent transfers behind a lock"
    )
    
    # Storage keys and location
    balance_key: str = Field(
        default="nova_balance",
        min_length=1,
        description="Storage key holding the text-encoded balance"
    )
    transactions_key: str = Field(
        default="nova_transactions",
        min_length=1,
        description="Storage key holding the JSON transaction list"
    )
    data_path: str = Field(
        default=".novabank/storage.json",
        description="File backing the local key-value storage"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    customer_name: str = Field(
        default="Alex",
        description="Name shown in greetings"
    )


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Sub-settings are loaded lazily to allow partial configuration
    
    @property
    def gemini(self) -> GeminiSettings:
        return GeminiSettings()
    
    @property
    def banking(self) -> BankingSettings:
        return BankingSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, plus "<name>_error"
    entries describing what is wrong. Used by the settings page.
    """
    results = {}
    
    settings = get_settings()
    
    try:
        gemini = settings.gemini
        results["gemini"] = gemini.has_api_key
        if not gemini.has_api_key:
            results["gemini_error"] = "GEMINI_API_KEY is not set"
    except Exception as e:
        results["gemini"] = False
        results["gemini_error"] = str(e)
    
    try:
        _ = settings.banking
        results["banking"] = True
    except Exception as e:
        results["banking"] = False
        results["banking_error"] = str(e)
    
    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
    
    return results
