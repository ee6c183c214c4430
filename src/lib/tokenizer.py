"""
Delimiter tokenizer

Splits source text into TEXT and ELEMENT tokens. An element is everything
from an opening delimiter up to and including the first closing delimiter
that follows it. An opening delimiter with no closing delimiter after it is
ordinary text, as is everything else. Delimiters match verbatim: there is no
escaping, and quotes inside an element have no effect on where it ends.
"""

from typing import List

from ..models.parser import Token, TokenKind
from .log import LOG


def _byteLength(text: str) -> int:
    return len(text.encode("utf-8"))


def tokenize(source: str, delimiter_start: str, delimiter_end: str) -> List[Token]:
    """
    Tokenize ``source`` into TEXT and ELEMENT tokens.

    Tokens cover the source exactly, in order, with no gaps. Adjacent text
    never produces two TEXT tokens in a row, and empty tokens are never
    emitted.

    Args:
        source: Input text
        delimiter_start: Opening delimiter (e.g. ``<!-- <``)
        delimiter_end: Closing delimiter (e.g. ``> -->``)

    Returns:
        List of tokens with both character and UTF-8 byte positions

    Raises:
        ValueError: If either delimiter is empty

    Example:
        >>> [t.kind.value for t in tokenize("a[b]c", "[", "]")]
        ['text', 'element', 'text']
    """
    if not delimiter_start or not delimiter_end:
        raise ValueError("Delimiters must be non-empty strings")

    tokens: List[Token] = []
    cursor: int = 0
    byte_cursor: int = 0
    text_start: int = 0
    text_byte_start: int = 0

    def text_flush(end: int, byte_end: int) -> None:
        if end > text_start:
            tokens.append(
                Token(TokenKind.TEXT, source[text_start:end],
                      text_start, end, text_byte_start, byte_end)
            )

    while True:
        element_start: int = source.find(delimiter_start, cursor)
        if element_start == -1:
            break
        element_end: int = source.find(delimiter_end, element_start + len(delimiter_start))
        if element_end == -1:
            break
        element_end += len(delimiter_end)

        byte_start: int = byte_cursor + _byteLength(source[cursor:element_start])
        byte_end: int = byte_start + _byteLength(source[element_start:element_end])

        text_flush(element_start, byte_start)
        tokens.append(
            Token(TokenKind.ELEMENT, source[element_start:element_end],
                  element_start, element_end, byte_start, byte_end,
                  delimiter_start, delimiter_end)
        )
        cursor, byte_cursor = element_end, byte_end
        text_start, text_byte_start = element_end, byte_end

    text_flush(len(source), byte_cursor + _byteLength(source[cursor:]))
    LOG(f"Tokenized {len(source)} characters into {len(tokens)} tokens", level=3)
    return tokens
