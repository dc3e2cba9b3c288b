"""Configuration settings for Mapmaker."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class LabelConfig(BaseModel):
    """Configuration for the label point search.

    The precision is expressed in map coordinate units. Smaller values make
    the search subdivide further before it accepts a candidate.
    """

    precision: float = Field(
        default=1.0,
        gt=0.0,
        description="Tolerance of the label point distance (map units)",
    )


class ArmyConfig(BaseModel):
    """Configuration for bonus army values."""

    min_armies: int = Field(
        default=1,
        ge=0,
        description="Lowest army value assigned to any bonus",
    )
    max_armies: int = Field(
        default=10,
        ge=1,
        description="Army value of a bonus with the highest possible score",
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "ArmyConfig":
        """Reject inverted army bounds."""
        if self.min_armies > self.max_armies:
            raise ValueError(
                f"min_armies ({self.min_armies}) exceeds max_armies ({self.max_armies})"
            )
        return self


class ValidationConfig(BaseModel):
    """Configuration for territory geometry validation."""

    skip_invalid: bool = Field(
        default=True,
        description="Skip label computation for self-intersecting territories",
    )


class ProcessingConfig(BaseModel):
    """Configuration for map processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto, 1 = in-process)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class MapmakerSettings(BaseModel):
    """Main application settings."""

    label: LabelConfig = Field(default_factory=LabelConfig)
    army: ArmyConfig = Field(default_factory=ArmyConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> MapmakerSettings:
    """Get default application settings."""
    return MapmakerSettings()
