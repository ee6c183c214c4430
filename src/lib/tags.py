"""
Element tag parser

Turns the body of an ELEMENT token into a Directive:

    name attr attr="value" attr='value' attr=value

The first name is the directive name, the rest are attributes. Any failure
yields None so that the caller keeps the element as plain text.
"""

from enum import Enum
from typing import List, Optional

from ..models.directives import Attribute, Directive
from ..models.parser import Token

QUOTES: str = "\"'"


class _State(Enum):
    NAME_BEGIN = "name_begin"
    NAME = "name"
    NAME_END = "name_end"
    VALUE_BEGIN = "value_begin"
    VALUE = "value"
    VALUE_QUOTED = "value_quoted"


def body_extract(token: Token) -> Optional[str]:
    """Strip the delimiters from an element token"""
    if not token.element_is() or token.delimiter_start is None or token.delimiter_end is None:
        return None
    value: str = token.value
    if not value.startswith(token.delimiter_start) or not value.endswith(token.delimiter_end):
        return None
    return value[len(token.delimiter_start) : len(value) - len(token.delimiter_end)]


def attributes_scan(body: str) -> Optional[List[List[Optional[str]]]]:
    """
    Scan a tag body into ``[name, value]`` pairs.

    Returns:
        Pairs in source order (value None for bare names), or None when the
        body is malformed: a quote or ``=`` where a name is expected, ``=``
        with no value, or an unterminated quoted value.
    """
    entries: List[List[Optional[str]]] = []
    state: _State = _State.NAME_BEGIN
    quote: str = ""

    for char in body:
        if state is _State.NAME_BEGIN or state is _State.NAME_END:
            if char.isspace():
                continue
            if char == "=" and state is _State.NAME_END:
                entries[-1][1] = ""
                state = _State.VALUE_BEGIN
            elif char == "=" or char in QUOTES:
                return None
            else:
                entries.append([char, None])
                state = _State.NAME
        elif state is _State.NAME:
            if char.isspace():
                state = _State.NAME_END
            elif char == "=":
                entries[-1][1] = ""
                state = _State.VALUE_BEGIN
            else:
                entries[-1][0] = f"{entries[-1][0]}{char}"
        elif state is _State.VALUE_BEGIN:
            if char.isspace():
                continue
            if char == "=":
                return None
            if char in QUOTES:
                quote = char
                state = _State.VALUE_QUOTED
            else:
                entries[-1][1] = char
                state = _State.VALUE
        elif state is _State.VALUE:
            if char.isspace():
                state = _State.NAME_BEGIN
            else:
                entries[-1][1] = f"{entries[-1][1]}{char}"
        elif state is _State.VALUE_QUOTED:
            if char == quote:
                state = _State.NAME_BEGIN
            else:
                entries[-1][1] = f"{entries[-1][1]}{char}"

    if state is _State.VALUE_BEGIN or state is _State.VALUE_QUOTED:
        return None
    return entries


def directive_parse(token: Token) -> Optional[Directive]:
    """
    Parse an element token into a Directive.

    Args:
        token: Token produced by the tokenizer

    Returns:
        Directive, or None for TEXT tokens, empty bodies and malformed tags

    Example:
        ``<!-- <removal-marker name="beta" skip> -->`` ->
        Directive("removal-marker", [Attribute("name", "beta"), Attribute("skip")])
    """
    body: Optional[str] = body_extract(token)
    if body is None:
        return None
    entries = attributes_scan(body)
    if not entries:
        return None
    name, _ = entries[0]
    attributes: List[Attribute] = [Attribute(key, value) for key, value in entries[1:]]
    return Directive(name=name, attributes=attributes)
