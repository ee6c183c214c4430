"""
codesweep core library

Tokenizer, directive parser, remover, formatter and reports.
"""

from .parser import Parser
from .remover import Remover
from .sweeper import Sweeper, ListFormat, clean
from .log import LOG, state_connectToLogger

__all__ = ["Parser", "Remover", "Sweeper", "ListFormat", "clean", "LOG", "state_connectToLogger"]
