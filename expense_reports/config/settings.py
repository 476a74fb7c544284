"""
Configuration Management for Expense Reports

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_REPORT_TYPE = "Daily"


class FirebaseSettings(BaseSettings):
    """Firebase Realtime Database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Firebase service account credentials JSON"
    )
    database_url: str = Field(
        ...,
        description="Realtime Database URL, e.g. https://<db>.firebaseio.com"
    )
    app_name: str = Field(
        default="expense-reports",
        description="Name of the firebase_admin app instance"
    )

    # Top-level collections
    expenses_path: str = Field(
        default="expenses",
        description="Collection that receives submitted expenses"
    )
    reports_path: str = Field(
        default="sales_inventory",
        description="Collection holding report entries keyed by report type"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Firebase credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError("Firebase database URL must start with https://")
        return v.rstrip("/")


class ReportSettings(BaseSettings):
    """Report export and rendering configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Output location
    output_dir: Path = Field(
        default=Path("data"),
        description="Application-private directory for exported files"
    )
    reports_dir_name: str = Field(
        default="Reports",
        description="Sub-directory of output_dir receiving report images"
    )

    # Canvas
    width: int = Field(default=800, ge=1)
    height: int = Field(default=600, ge=1)
    font_size: int = Field(default=24, ge=1)
    text_x: int = Field(
        default=50,
        ge=0,
        description="Horizontal offset of every text line"
    )
    first_line_y: int = Field(
        default=50,
        ge=0,
        description="Baseline of the first text line"
    )
    line_spacing: int = Field(
        default=30,
        ge=1,
        description="Vertical distance between consecutive baselines"
    )
    font_path: Optional[str] = Field(
        default=None,
        description="TrueType font file; Pillow's default font when unset"
    )

    # Report types offered in the selector
    types: str = Field(
        default="Daily,Weekly,Monthly",
        description="Comma-separated list of report types"
    )
    default_type: str = Field(
        default=DEFAULT_REPORT_TYPE,
        description="Report type used when none is selected"
    )

    open_in_viewer: bool = Field(
        default=False,
        description="Ask the OS to open exported reports"
    )

    @model_validator(mode="after")
    def check_default_type(self) -> "ReportSettings":
        if not self.default_type.strip():
            raise ValueError("default_type must not be blank")
        return self

    @property
    def types_list(self) -> list[str]:
        """Configured report types, default type first if missing."""
        types = [t.strip() for t in self.types.split(",") if t.strip()]
        if self.default_type not in types:
            types.insert(0, self.default_type)
        return types

    @property
    def reports_dir(self) -> Path:
        return self.output_dir / self.reports_dir_name


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

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the stdlib root logger"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


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

    # Sub-settings are loaded lazily so that a missing Firebase
    # configuration does not prevent rendering or tests from running.

    @property
    def firebase(self) -> FirebaseSettings:
        return FirebaseSettings()

    @property
    def reports(self) -> ReportSettings:
        return ReportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("firebase", "reports", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
