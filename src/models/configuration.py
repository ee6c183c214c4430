"""
Sweep configuration models

Immutable values handed to the core. Built from AppSettings (and optional
profile/CLI overrides) by the front end, or directly by library callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional

from .directives import SKIP_ATTRIBUTE, UNWRAP_BLOCK_ATTRIBUTE


@dataclass(frozen=True)
class TimeLimitedConfiguration:
    """
    Attributes:
        tag_name: Directive name handled by the time-limited evaluator
        time_offset: UTC offset appended to ``to`` values (``+09:00``)
        current: Instant compared against; None means "now"
    """
    tag_name: str = "time-limited"
    time_offset: str = "+00:00"
    current: Optional[datetime] = None

    def current_get(self) -> datetime:
        return self.current if self.current is not None else datetime.now().astimezone()


@dataclass(frozen=True)
class RemovalMarkerConfiguration:
    """
    Attributes:
        tag_name: Directive name handled by the marker evaluator
        targets: Marker names scheduled for removal
    """
    tag_name: str = "removal-marker"
    targets: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SweepConfiguration:
    """Everything the sweeper needs besides the delimiters"""
    time_limited: TimeLimitedConfiguration = field(default_factory=TimeLimitedConfiguration)
    removal_marker: RemovalMarkerConfiguration = field(default_factory=RemovalMarkerConfiguration)
    unwrap_block_attribute: str = UNWRAP_BLOCK_ATTRIBUTE
    skip_attribute: str = SKIP_ATTRIBUTE
