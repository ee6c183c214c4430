"""
Parser-specific data models

Type-safe structures for the tokenizer and tree parser. Every position is
carried twice: as a character index into the decoded source and as a byte
offset into its UTF-8 encoding. Removal works exclusively on byte offsets.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .directives import Directive


class TokenKind(Enum):
    """Kind of a lexical token"""
    TEXT = "text"
    ELEMENT = "element"


@dataclass(frozen=True)
class Token:
    """
    A contiguous span of source text

    Attributes:
        kind: TEXT for plain content, ELEMENT for a delimiter-bounded tag
        value: The token text, delimiters included for ELEMENT tokens
        start: Character index of the first character
        end: Character index one past the last character
        byte_start: UTF-8 byte offset of the first byte
        byte_end: UTF-8 byte offset one past the last byte
        delimiter_start: Opening delimiter (ELEMENT tokens only)
        delimiter_end: Closing delimiter (ELEMENT tokens only)

    Example:
        For source "a<!-- <x> -->" with delimiters "<!-- <" / "> -->":
        Token(TokenKind.ELEMENT, "<!-- <x> -->", 1, 13, 1, 13, "<!-- <", "> -->")
    """
    kind: TokenKind
    value: str
    start: int
    end: int
    byte_start: int
    byte_end: int
    delimiter_start: Optional[str] = None
    delimiter_end: Optional[str] = None

    def element_is(self) -> bool:
        return self.kind is TokenKind.ELEMENT


@dataclass
class TextPart:
    """Content kept verbatim: plain text or an element that is not a live directive"""
    token: Token


@dataclass
class DirectiveNode:
    """
    A matched open/close directive pair and everything between them

    Attributes:
        directive: Parsed opening tag
        start_token: The opening element token
        end_token: The matching closing element token
        children: Content parts between the two tags
    """
    directive: Directive
    start_token: Token
    end_token: Token
    children: List["ContentPart"] = field(default_factory=list)


ContentPart = Union[TextPart, DirectiveNode]
