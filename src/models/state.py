"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from argparse import Namespace
from pathlib import Path
from typing import Any, Callable, List, Optional, Type, TypeVar
from dataclasses import dataclass, field

PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the sweep pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: CLI options
        - settings_resolve: settings, configuration
        - source_read: sourceText
        - source_sweep: resultText
        - results_write: (no additions, terminal stage)

    Attributes:
        filename: Input file, or None to read stdin
        output: Output file, or None to write stdout
        verbosity: Logging verbosity level (0-3)
        listReady: Report ready removals instead of cleaning
        listAll: Report ready and pending removals instead of cleaning
        jsonOutput: Emit list reports as JSON
        profile: Optional YAML profile path
        settings: Resolved AppSettings (env, .env, profile and CLI merged)
        configuration: SweepConfiguration built from settings
        sourceText: Input text
        resultText: Cleaned text or rendered report
    """

    # CLI arguments
    filename: Optional[Path] = field(default=None)
    output: Optional[Path] = field(default=None)
    verbosity: int = field(default=0)
    listReady: bool = field(default=False)
    listAll: bool = field(default=False)
    jsonOutput: bool = field(default=False)
    profile: Optional[Path] = field(default=None)
    delimiter_start: Optional[str] = field(default=None)
    delimiter_end: Optional[str] = field(default=None)
    time_limited_tag_name: Optional[str] = field(default=None)
    time_limited_time_offset: Optional[str] = field(default=None)
    time_limited_current: Optional[str] = field(default=None)
    removal_marker_tag_name: Optional[str] = field(default=None)
    removal_marker_target_name: List[str] = field(default_factory=list)
    removal_marker_target_config: Optional[Path] = field(default=None)

    # Pipeline state
    settings: Optional[Any] = field(default=None)  # AppSettings at runtime
    configuration: Optional[Any] = field(default=None)  # SweepConfiguration at runtime
    sourceText: Optional[str] = field(default=None)
    resultText: Optional[str] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options without a matching field are ignored.
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {
            k: v for k, v in vars(options).items() if k in valid_fields and v is not None
        }
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            settings_resolve,
            source_read,
            source_sweep,
            results_write
        )

    This is equivalent to:
        results_write(source_sweep(source_read(settings_resolve(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
