"""
Removal evaluators

An evaluator decides, for a single directive, whether its content should be
removed now. Evaluators are looked up by directive name through an
EvaluatorRegistry. Missing or unusable attributes always mean "keep".
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..models.directives import Directive
from .log import LOG

TIME_FORMAT: str = "%Y-%m-%d %H:%M:%S %z"


class RemovalEvaluator(ABC):
    """Decides whether a directive's content is due for removal"""

    @abstractmethod
    def removal_is(self, directive: Directive) -> bool:
        ...


class TimeLimitedEvaluator(RemovalEvaluator):
    """
    Removes content whose ``to`` instant has been reached

    The ``to`` attribute is a local date-time ``YYYY-MM-DD HH:MM:SS``
    interpreted at ``time_offset``. Removal happens when the current
    instant is at or after it.

    Example:
        >>> evaluator = TimeLimitedEvaluator(datetime(2025, 1, 1, tzinfo=timezone.utc), "+00:00")
        >>> evaluator.removal_is(Directive("time-limited", [Attribute("to", "2024-12-31 23:59:59")]))
        True
    """

    def __init__(self, current_time: datetime, time_offset: str = "+00:00"):
        if current_time.tzinfo is None:
            current_time = current_time.astimezone()
        self.current_time = current_time
        self.time_offset = time_offset

    def expiry_parse(self, value: str) -> Optional[datetime]:
        try:
            return datetime.strptime(f"{value} {self.time_offset}", TIME_FORMAT)
        except ValueError:
            return None

    def removal_is(self, directive: Directive) -> bool:
        value: Optional[str] = directive.value_get("to")
        if value is None:
            return False
        expires: Optional[datetime] = self.expiry_parse(value)
        if expires is None:
            LOG(f"Unparseable expiry '{value}' on '{directive.name}', keeping", level=3)
            return False
        return self.current_time >= expires


class MarkerEvaluator(RemovalEvaluator):
    """Removes content whose ``name`` attribute is one of the configured targets"""

    def __init__(self, targets: Iterable[str]):
        self.targets: Set[str] = set(targets)

    def removal_is(self, directive: Directive) -> bool:
        name: Optional[str] = directive.value_get("name")
        return name is not None and name in self.targets


class EvaluatorRegistry:
    """
    Registry of removal evaluators

    Maps directive names to the evaluator responsible for them. Directives
    with no registered evaluator are never removed.
    """

    def __init__(self, evaluators: Optional[Dict[str, RemovalEvaluator]] = None) -> None:
        self.evaluators: Dict[str, RemovalEvaluator] = dict(evaluators or {})

    def register(self, name: str, evaluator: RemovalEvaluator) -> None:
        """Register an evaluator for directive ``name``"""
        self.evaluators[name] = evaluator

    def get(self, name: str) -> Optional[RemovalEvaluator]:
        return self.evaluators.get(name)

    def names_list(self) -> List[str]:
        return sorted(self.evaluators)

    def __contains__(self, name: object) -> bool:
        return name in self.evaluators

    def __iter__(self) -> Iterator[Tuple[str, RemovalEvaluator]]:
        return iter(self.evaluators.items())
