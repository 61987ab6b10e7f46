"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import Granularity, NavigationLimits, TimelineBounds
from .domain.period_selector import as_date


class TimelineConfig(BaseModel):
    """Visible hours and rendering scale of the daily timeline."""
    start_hour: int = 8
    end_hour: int = 20
    minimum_visual_height: int = 15
    pixels_per_hour: int = 80
    slot_minutes: int = 60

    @field_validator("start_hour")
    @classmethod
    def validate_start_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"start_hour must be between 0 and 23, got {v}")
        return v

    @field_validator("end_hour")
    @classmethod
    def validate_end_hour(cls, v: int) -> int:
        """Validate hour is between 1 and 24 (24 = midnight at the end of the day)."""
        if not 1 <= v <= 24:
            raise ValueError(f"end_hour must be between 1 and 24, got {v}")
        return v

    @field_validator("minimum_visual_height", "pixels_per_hour", "slot_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "TimelineConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        if self.minimum_visual_height > (self.end_hour - self.start_hour) * 60:
            raise ValueError("minimum_visual_height must fit inside the visible window")
        return self

    def to_bounds(self) -> TimelineBounds:
        return TimelineBounds(
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            minimum_visual_height=self.minimum_visual_height,
        )


class NavigationConfig(BaseModel):
    """Optional hard limits for period navigation."""
    min_date: date | None = None
    max_date: date | None = None

    @model_validator(mode="after")
    def validate_order(self) -> "NavigationConfig":
        if self.min_date and self.max_date and self.min_date > self.max_date:
            raise ValueError("min_date must not be after max_date")
        return self

    def to_limits(self) -> NavigationLimits:
        return NavigationLimits(
            min_date=as_date(self.min_date) if self.min_date else None,
            max_date=as_date(self.max_date) if self.max_date else None,
        )


class SourceConfig(BaseModel):
    """Where appointments come from."""
    kind: Literal["json", "http"] = "json"
    path: Path | None = None
    base_url: str | None = None
    token: str | None = None
    timeout: int = 30

    @model_validator(mode="after")
    def validate_kind_settings(self) -> "SourceConfig":
        if self.kind == "http" and not self.base_url:
            raise ValueError("source.base_url is required when source.kind is 'http'")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    locale: str = "en"
    timezone: str = "UTC"
    week_start: int = 0  # 0=Monday, 6=Sunday
    default_view: Granularity = Granularity.DAY

    @field_validator("week_start")
    @classmethod
    def validate_week_start(cls, value: int) -> int:
        if value not in range(7):
            raise ValueError(f"week_start must be between 0 and 6, got {value}")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative fixture paths are resolved against the config file
        if config.source.path is not None and not config.source.path.is_absolute():
            config.source.path = config_path.parent / config.source.path

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
