"""
Configuration data models for filesearch.

This module defines the optional settings a configuration file can provide:
default search limits, output options and logging options.
"""

from typing import Dict, List, Optional, Any
import logging
from pydantic import BaseModel, Field, field_validator


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class LimitsConfig(BaseModel):
    """
    Default limits applied when the command line leaves them unset.

    Attributes:
        max_depth: Default deepest subdirectory level to enter
        max_results: Default number of matches after which the walk stops
    """

    max_depth: Optional[int] = Field(None, gt=0, description="Default maximum depth")
    max_results: Optional[int] = Field(None, gt=0, description="Default maximum number of results")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class OutputConfig(BaseModel):
    """
    Configuration for what the command line prints around the results.

    Attributes:
        echo_request: Print the pattern and directory before the matches
        show_stats: Print walk counters after the summary block
    """

    echo_request: bool = Field(True, description="Print the pattern and directory before searching")
    show_stats: bool = Field(False, description="Print walk counters after the summary")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LoggingConfig(BaseModel):
    """
    Configuration for diagnostic logging.

    Attributes:
        level: Log level name for the root logger
        format: Format string for log records
    """

    level: str = Field("WARNING", description="Log level name")
    format: str = Field("%(asctime)s | %(levelname)s | %(message)s", description="Log record format")

    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v) -> str:
        """Validate and normalize the log level name."""
        if not isinstance(v, str):
            raise ValueError(f"Log level must be a string, got {type(v).__name__}")
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level

    def get_level_number(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SearchConfig(BaseModel):
    """
    Complete configuration for filesearch.

    Attributes:
        limits: Default search limits
        output: Output options
        logging: Logging options
    """

    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Default search limits")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output options")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging options")

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for settings that are valid but suspicious.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.limits.max_results is not None and self.limits.max_results > 1000000:
            warnings.append("Very high default max_results may produce a lot of output")

        if self.limits.max_depth is not None and self.limits.max_depth > 256:
            warnings.append("Default max_depth above 256 is effectively unlimited")

        if self.logging.level == 'DEBUG':
            warnings.append("Debug logging reports every skipped entry")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'limits': self.limits.to_dict(),
            'output': self.output.to_dict(),
            'logging': self.logging.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfig':
        """Create a SearchConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Max depth: {self.limits.max_depth or 'unlimited'}"]
        parts.append(f"Max results: {self.limits.max_results or 'unlimited'}")
        parts.append(f"Log level: {self.logging.level}")
        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    known_sections = {'limits', 'output', 'logging'}
    unknown = sorted(set(config_data) - known_sections)
    if unknown:
        raise ValueError(f"Unknown configuration section(s): {', '.join(unknown)}")

    for section in known_sections:
        value = config_data.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"Section '{section}' must be a mapping, got {type(value).__name__}")

    try:
        config = SearchConfig.from_dict({k: v for k, v in config_data.items() if v is not None})
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    return config.to_dict()
