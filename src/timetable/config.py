"""Timetable configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from timetable.models import ViewMode


class TimetableConfig(BaseSettings):
    """Timetable configuration loaded from environment variables.

    Settings are loaded from TIMETABLE_* environment variables with sensible
    defaults. For local development, create a .env file in the project root.
    The builder itself never reads this; entry points pass values in.
    """

    # Default build options
    upcoming_only: bool = Field(
        default=True,
        description="Hide lessons dated before today",
    )
    view_mode: ViewMode = Field(
        default=ViewMode.GRID,
        description="Default output shape (grid or list)",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "TIMETABLE_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: TimetableConfig | None = None


def get_config() -> TimetableConfig:
    """Get the timetable configuration singleton.

    Returns:
        TimetableConfig: Timetable configuration instance
    """
    global _config
    if _config is None:
        _config = TimetableConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
