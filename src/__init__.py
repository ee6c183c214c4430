"""
codesweep - directive-driven removal of expired and targeted code

Strips blocks marked by directive comments such as
``<!-- <time-limited to="2025-01-01 00:00:00"> --> ... <!-- </time-limited> -->``
from source files and tidies the whitespace they leave behind.
"""

__version__ = "1.0.0"

from .lib import Parser, Remover, Sweeper, ListFormat, clean, LOG, state_connectToLogger
from .models import SweepConfiguration, TimeLimitedConfiguration, RemovalMarkerConfiguration

__all__ = [
    "Parser",
    "Remover",
    "Sweeper",
    "ListFormat",
    "clean",
    "SweepConfiguration",
    "TimeLimitedConfiguration",
    "RemovalMarkerConfiguration",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
