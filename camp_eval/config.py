"""Application configuration with validation."""
from typing import Optional, Literal, Dict
from functools import lru_cache
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# CAMP STATE CODE PREFIXES
# =============================================================================
# Maps camp state -> registration code prefix. A full state code reads
# "<prefix>/<CAMP_YEAR_CODE>/<4 digits>", e.g. "LA/25C/0001".
# =============================================================================

DEFAULT_CAMP_STATE_PREFIXES: Dict[str, str] = {
    "Lagos": "LA",
    "Ondo": "OD",
}


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Camp Evaluation API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Snowflake
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis (sessions)
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_TTL_SECONDS: int = Field(default=28800, ge=60, le=604800)  # 8 hours

    # Registration rules
    CAMP_YEAR_CODE: str = Field(default="25C", pattern=r"^[0-9]{2}[A-Z]$")
    CAMP_STATE_PREFIXES: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CAMP_STATE_PREFIXES)
    )
    CALL_UP_PREFIX: str = "NYSC/"
    PHONE_COUNTRY_CODE: str = Field(default="234", pattern=r"^[0-9]{1,3}$")
    PHONE_SUBSCRIBER_DIGITS: int = Field(default=10, ge=6, le=12)
    PLATOON_COUNT: int = Field(default=10, ge=1, le=50)

    @field_validator("CAMP_STATE_PREFIXES")
    @classmethod
    def validate_prefixes(cls, v: Dict[str, str]) -> Dict[str, str]:
        for state, prefix in v.items():
            if not prefix or not prefix.isalpha() or not prefix.isupper():
                raise ValueError(f"Invalid state code prefix {prefix!r} for {state}")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
