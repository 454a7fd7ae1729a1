from pathlib import Path

from pydantic import Field, field_validator
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path(__file__).parent


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Level applied to the 'spryable' logger when the container is initialised.",
    )
    ECHO_CONTRACT_VIOLATIONS: bool = Field(
        default=True,
        description="If True, the default fatal hook logs every contract violation diagnostic at ERROR.",
    )

    # Diagnostics
    ARGUMENT_DESCRIPTION_LIMIT: int | None = Field(
        default=200,
        ge=20,
        description=(
            "Max characters used to render a single argument inside diagnostics. "
            "Longer renderings are cut and suffixed with an ellipsis. "
            "Set to None (or '', 'none', 'null' via env) to render arguments in full."
        ),
    )

    # Resolution
    PERMIT_FALLBACK: bool = Field(
        default=True,
        description=(
            "If False, fallback values handed to stubbed_value() are ignored and a call "
            "without a matching stub is always a contract violation. Useful for strict suites."
        ),
    )

    @field_validator("ARGUMENT_DESCRIPTION_LIMIT", mode="before")
    @classmethod
    def _noneify_limit(cls, v: str) -> str | None:
        # Allow '', 'none', 'null' (case-insensitive) to disable truncation via env
        if v is None:
            return None
        if isinstance(v, str):
            s = v.strip().lower()
            if s in {"", "none", "null"}:
                return None
        return v

    model_config = SettingsConfigDict(
        env_prefix="SPRYABLE_",
        env_file=CONFIG_DIR.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
