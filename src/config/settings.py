"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CODESWEEP_ prefix (e.g., CODESWEEP_DELIMITER_START="/* <").

Settings can also be loaded from a .env file in the project root.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.configuration import (
    RemovalMarkerConfiguration,
    SweepConfiguration,
    TimeLimitedConfiguration,
)


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CODESWEEP_ prefix.

    Examples:
        CODESWEEP_DELIMITER_START="// <"
        CODESWEEP_DELIMITER_END=">"
        CODESWEEP_TIME_LIMITED_TIME_OFFSET=+09:00
        CODESWEEP_REMOVAL_MARKER_TARGETS='["feature1", "feature2"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="CODESWEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Element delimiters
    delimiter_start: str = Field(
        default="<!-- <",
        min_length=1,
        description="Opening delimiter of directive elements",
    )

    delimiter_end: str = Field(
        default="> -->",
        min_length=1,
        description="Closing delimiter of directive elements",
    )

    # Time-limited directives
    time_limited_tag_name: str = Field(
        default="time-limited",
        description="Directive name handled by the time-limited evaluator",
    )

    time_limited_time_offset: str = Field(
        default="+00:00",
        description="UTC offset used to interpret 'to' attributes",
    )

    time_limited_current: Optional[datetime] = Field(
        default=None,
        description="Instant to evaluate against instead of the current time",
    )

    # Removal-marker directives
    removal_marker_tag_name: str = Field(
        default="removal-marker",
        description="Directive name handled by the removal-marker evaluator",
    )

    removal_marker_targets: List[str] = Field(
        default_factory=list,
        description="Marker names scheduled for removal",
    )

    # Reserved attributes
    unwrap_block_attribute: str = Field(
        default="unwrap-block",
        description="Attribute selecting the unwrap-block removal strategy",
    )

    skip_attribute: str = Field(
        default="skip",
        description="Attribute exempting a directive from evaluation",
    )

    def configuration_make(self, targets_extra: Iterable[str] = ()) -> SweepConfiguration:
        """
        Build the immutable configuration consumed by the sweeper.

        Args:
            targets_extra: Marker names to add to ``removal_marker_targets``

        Returns:
            SweepConfiguration reflecting these settings
        """
        return SweepConfiguration(
            time_limited=TimeLimitedConfiguration(
                tag_name=self.time_limited_tag_name,
                time_offset=self.time_limited_time_offset,
                current=self.time_limited_current,
            ),
            removal_marker=RemovalMarkerConfiguration(
                tag_name=self.removal_marker_tag_name,
                targets=frozenset([*self.removal_marker_targets, *targets_extra]),
            ),
            unwrap_block_attribute=self.unwrap_block_attribute,
            skip_attribute=self.skip_attribute,
        )


# Singleton instance - import this in your code
appsettings = AppSettings()
