"""
Sweep tracing on stderr

codesweep is silent by default (verbosity 0). Every ``-v`` on the command
line raises the verbosity by one:

    1   stage progress (cleaning or listing started, output written)
        and a rejected --time-limited-current
    2   run summary: resolved settings and profile, source size, parsed
        parts and the number of ranges removed or listed
    3   per-directive trace: keep or remove decisions, skipped tags,
        parser hoisting, token and cut point counts

The verbosity is read from the ProgramState that the CLI connects to the
current context, so lib modules never take it as an argument. When codesweep
is used as a library no state is connected and LOG() emits nothing.

    state_connectToLogger(state)
    LOG(f"Removing {len(markers)} ranges", level=2)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss.SSS}</green> │ "
    "<cyan>{module: <10}</cyan> "
    "<cyan>{function: <18}</cyan> ║ "
    "<level>{message}</level>"
)

# LOG() does the gating, the sink lets everything through
logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a ``verbosity`` attribute, or None to disconnect
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit ``message`` when the connected state is verbose enough.

    Args:
        message: Log message to display
        level: Lowest verbosity at which the message is shown
        **kwargs: Additional loguru metadata
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
