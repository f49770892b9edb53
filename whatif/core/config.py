"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TAX_YEAR = 2025

# Kept in sync with whatif.tax.year_config.TAX_YEAR_CONFIGS; importing it here
# would make settings depend on the tax tables.
SUPPORTED_TAX_YEARS = (2025,)


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    """Current environment (development, staging, production)."""

    debug: bool = False
    """Enable debug mode."""

    log_format: str | None = None
    """Logging format override (json or console). Defaults by environment."""

    # Tax
    tax_year: int = DEFAULT_TAX_YEAR
    """Tax year used when a caller does not pass one explicitly."""

    @field_validator("log_format", mode="before")
    @classmethod
    def parse_log_format(cls, value: object) -> str | None:
        """Accept json/console (any case); treat blank as unset."""
        if value is None:
            return None
        text = str(value).strip().lower()
        if not text:
            return None
        if text not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'.")
        return text

    @field_validator("tax_year")
    @classmethod
    def validate_tax_year(cls, value: int) -> int:
        """Reject tax years without bundled tax tables."""
        if value not in SUPPORTED_TAX_YEARS:
            raise ValueError(
                f"TAX_YEAR {value} is not supported. "
                f"Available years: {list(SUPPORTED_TAX_YEARS)}"
            )
        return value


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    raise RuntimeError(
        "Failed to initialize engine settings. "
        f"Check environment variables in {env_file.resolve() if env_file.exists() else '.env'}.\n"
        + f"Error: {exc}\n"
        + "Allowed values: LOG_FORMAT=json|console, "
        + f"TAX_YEAR in {list(SUPPORTED_TAX_YEARS)}."
    ) from exc
