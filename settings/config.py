from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants.display import DEFAULT_MAX_RULES
from constants.levels import DEFAULT_BARS_NUMBER, SUPPORTED_BARS


class Settings(BaseSettings):
    """
    Centralized application configuration loaded from environment variables.
    Uses Pydantic's BaseSettings for robust env parsing and validation.
    """

    # App
    APP_NAME: str = "Password Strength API"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    # Comma-separated origins, e.g. "http://localhost:3000,https://myapp.com"
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    # Security middleware toggles
    ENABLE_RATE_LIMITER: bool = True
    RATE_LIMIT_REQUESTS: int = 100  # requests
    RATE_LIMIT_WINDOW_SECONDS: int = 60  # per this many seconds
    RATE_LIMIT_STORAGE_URI: Optional[str] = None  # e.g., "redis://localhost:6379"

    # Strength defaults for requests that leave them out
    DEFAULT_BARS_NUMBER: int = DEFAULT_BARS_NUMBER
    DEFAULT_MAX_RULES: int = DEFAULT_MAX_RULES
    # Request guard only; the scoring engine itself accepts any length
    MAX_PASSWORD_LENGTH: int = 1024

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def allowed_origins_list(self) -> List[str]:
        """
        Parses comma-separated origins into a list. Trims spaces, omits empties.
        """
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def default_rate_limit(self) -> str:
        """
        Express the rate limit window in slowapi's limit-string syntax.
        """
        req = self.RATE_LIMIT_REQUESTS
        win = self.RATE_LIMIT_WINDOW_SECONDS
        units = {1: "second", 60: "minute", 3600: "hour", 86400: "day"}
        if win in units:
            return f"{req}/{units[win]}"
        return f"{req} per {win} seconds"

    @field_validator("DEBUG", mode="before")
    def _normalize_debug(cls, v):
        # Accept "1", "true", "True", etc.
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes", "on")
        return bool(v)

    @field_validator("DEFAULT_BARS_NUMBER")
    def _check_bars(cls, v):
        if v not in SUPPORTED_BARS:
            raise ValueError(f"DEFAULT_BARS_NUMBER must be one of {SUPPORTED_BARS}")
        return v

    @field_validator("DEFAULT_MAX_RULES", "MAX_PASSWORD_LENGTH")
    def _non_negative(cls, v):
        if v < 0:
            raise ValueError("must be >= 0")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance to avoid re-parsing env on each import.
    """
    return Settings()
