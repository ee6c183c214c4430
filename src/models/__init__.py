"""
Models package for codesweep

Contains data structures shared by the tokenizer, parser, remover and reports.
"""

from .state import ProgramState, pipeline
from .directives import Attribute, Directive
from .parser import Token, TokenKind, TextPart, DirectiveNode, ContentPart
from .markers import ByteRange, RemovableRange, RemoveMarker, RemovedPosition
from .report import ItemStatus, ListItem
from .configuration import SweepConfiguration, TimeLimitedConfiguration, RemovalMarkerConfiguration

__all__ = [
    "ProgramState",
    "pipeline",
    "Attribute",
    "Directive",
    "Token",
    "TokenKind",
    "TextPart",
    "DirectiveNode",
    "ContentPart",
    "ByteRange",
    "RemovableRange",
    "RemoveMarker",
    "RemovedPosition",
    "ItemStatus",
    "ListItem",
    "SweepConfiguration",
    "TimeLimitedConfiguration",
    "RemovalMarkerConfiguration",
]
