"""
Directive tree parser

Builds a tree of content parts from the token stream.

The parser operates in two phases:
1. Tokenizing: split the source on the configured delimiters
2. Tree building: pair opening and closing directives recursively

Key features:
- Elements that do not parse as directives stay text
- A closing tag closes the nearest open ancestor with the same name
- Unclosed and mis-nested directives are hoisted: the opening tag becomes
  text and its children are spliced into the parent
- Orphan closing tags stay text

Example:
    >>> parser = Parser("a<x>b</x>c", "<", ">")
    >>> parts = parser.parse()
    >>> parts[1].directive.name
    'x'
    >>> parts[1].children[0].token.value
    'b'
"""

from typing import List, Optional, Tuple

from ..models.directives import Directive
from ..models.parser import ContentPart, DirectiveNode, TextPart, Token
from .log import LOG
from .tags import directive_parse
from .tokenizer import tokenize

Closing = Tuple[Token, Directive]


class Parser:
    """
    Parser for delimiter-bounded directive comments

    Handles:
    - Nested directives of the same or different names
    - Unclosed directives (content kept, tag kept as text)
    - Crossed nesting such as ``<a><b></a></b>``
    """

    def __init__(self, source: str, delimiter_start: str, delimiter_end: str, debug: bool = False):
        """
        Initialize parser with source text

        Args:
            source: Raw source text
            delimiter_start: Opening delimiter of directive elements
            delimiter_end: Closing delimiter of directive elements
            debug: Log every tree decision

        Attributes:
            source: Source text being parsed
            tokens: Token stream covering the whole source
        """
        self.source = source
        self.debug = debug
        self.delimiter_start = delimiter_start
        self.delimiter_end = delimiter_end
        self.tokens: List[Token] = tokenize(source, delimiter_start, delimiter_end)

    def parse(self) -> List[ContentPart]:
        """
        Parse the token stream into content parts

        Returns:
            Top-level content parts in source order
        """
        parts: List[ContentPart] = []
        self.tree_build(0, parts, [])
        LOG(f"Parsed {len(parts)} top-level parts from {len(self.tokens)} tokens", level=2)
        return parts

    def trace(self, message: str) -> None:
        if self.debug:
            LOG(message, level=3)

    def tree_build(
        self, cursor: int, parts: List[ContentPart], parents: List[str]
    ) -> Tuple[int, Optional[Closing]]:
        """
        Consume tokens into ``parts`` until a closing tag for one of
        ``parents`` is reached or the tokens run out.

        Args:
            cursor: Index of the next token to consume
            parts: Accumulator for this nesting level
            parents: Names of the open ancestors, outermost first

        Returns:
            (cursor after the last consumed token, closing tag that ended this
            level or None at end of input)
        """
        while cursor < len(self.tokens):
            token: Token = self.tokens[cursor]
            cursor += 1

            directive: Optional[Directive] = directive_parse(token) if token.element_is() else None
            if directive is None:
                parts.append(TextPart(token))
                continue

            if directive.closing_is():
                if directive.name[1:] in parents:
                    return cursor, (token, directive)
                self.trace(f"Orphan closing tag '{directive.name}' at byte {token.byte_start}")
                parts.append(TextPart(token))
                continue

            children: List[ContentPart] = []
            cursor, closing = self.tree_build(cursor, children, parents + [directive.name])

            if closing is not None and closing[1].closes(directive.name):
                parts.append(DirectiveNode(directive, token, closing[0], children))
                continue

            self.trace(f"Hoisting unmatched '{directive.name}' at byte {token.byte_start}")
            parts.append(TextPart(token))
            parts.extend(children)
            if closing is not None:
                return cursor, closing

        return cursor, None


def tree_parse(source: str, delimiter_start: str, delimiter_end: str) -> List[ContentPart]:
    """Convenience wrapper: tokenize and parse in one call"""
    return Parser(source, delimiter_start, delimiter_end).parse()
