"""
Directive models

A directive is the parsed form of an element token: a name followed by
attributes. Closing directives carry the name of the directive they close
prefixed with a slash.
"""

from dataclasses import dataclass, field
from typing import List, Optional


SKIP_ATTRIBUTE: str = "skip"
UNWRAP_BLOCK_ATTRIBUTE: str = "unwrap-block"


@dataclass(frozen=True)
class Attribute:
    """
    A single tag attribute

    Attributes:
        name: Attribute name
        value: Attribute value, or None for a bare flag (e.g. ``skip``)
    """
    name: str
    value: Optional[str] = None


@dataclass
class Directive:
    """
    Parsed element tag

    Attributes:
        name: Directive name (``time-limited``, ``/time-limited``, ...)
        attributes: Attributes in source order

    Example:
        ``<!-- <time-limited to="2025-01-01 00:00:00" skip> -->`` parses to
        Directive("time-limited", [Attribute("to", "2025-01-01 00:00:00"),
                                   Attribute("skip")])
    """
    name: str
    attributes: List[Attribute] = field(default_factory=list)

    def closing_is(self) -> bool:
        """True for a closing tag such as ``/time-limited``"""
        return self.name.startswith("/")

    def closes(self, name: str) -> bool:
        """True if this is the closing tag for directive ``name``"""
        return self.closing_is() and self.name[1:] == name

    def attribute_get(self, name: str) -> Optional[Attribute]:
        """First attribute called ``name``, or None"""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def attribute_has(self, name: str) -> bool:
        return self.attribute_get(name) is not None

    def value_get(self, name: str) -> Optional[str]:
        attribute: Optional[Attribute] = self.attribute_get(name)
        return attribute.value if attribute else None

    def skip_is(self, attribute: str = SKIP_ATTRIBUTE) -> bool:
        """Check whether the directive opted out of evaluation"""
        return self.attribute_has(attribute)
